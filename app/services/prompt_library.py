# /sahayak-backend/app/services/prompt_library.py

"""
This file is the central library for all master prompts used by the
application's AI services. Prompts are plain format strings; `tool_service`
fills them from validated request models. Literal JSON braces are doubled.
"""

# --- Stories ---

STORY_PROMPT = """
You are a storyteller for Indian primary and middle school classrooms.

Write an educational story in {language} for grade {grade} students about: {prompt}
Subject context: {subject}

**--- REQUIREMENTS ---**
- Make it culturally relevant to Indian students, with characters who have Indian names.
- Set it in a familiar environment such as a village, a town or a school.
- Use simple language appropriate for grade {grade}.
- Weave the educational content naturally into the narrative and close with a clear moral or lesson.
- Format with proper paragraphs and dialogue. Length: 300-500 words.
"""

PERSONALIZED_STORY_PROMPT = """
You are a storyteller for Indian primary and middle school classrooms.

Write an educational story in {language} for grade {grade} students about: {prompt}
Subject context: {subject}

**--- PERSONALIZATION ---**
{personalization}

**--- REQUIREMENTS ---**
- Open with a scene that connects to the student's own world.
- Incorporate local festivals, food and customs where they fit.
- Use simple language appropriate for grade {grade}.
- Give the characters relatable challenges and end with an actionable takeaway.
- Length: 400-600 words. Make the story memorable and encourage discussion.
"""

# --- Worksheets ---

WORKSHEET_PROMPT = """
Create a printable worksheet for grade {grade} {subject} students in {language}.
{topic_line}
{image_line}

**--- STRUCTURE ---**
1. Header with name, date and roll number fields.
2. Clear instructions.
3. Section A: Multiple Choice Questions (3-4 questions, 4 options each).
4. Section B: Fill in the Blanks (2-3 questions).
5. Section C: Short Answer Questions (2-3 questions).
6. Section D: Problem Solving or Application (1-2 questions).
7. Answer Key.

Keep the difficulty appropriate for grade {grade} and the examples familiar to Indian students.
"""

DIFFERENTIATED_WORKSHEET_PROMPT = """
Create a worksheet for grade {grade} {subject} students in {language}.
Topic: {topic}
Difficulty: {difficulty}
{image_line}

**--- INCLUDE ---**
- 10-15 questions of varying types appropriate for grade {grade}: multiple choice, fill-in-the-blanks, short answer, problem-solving and creative thinking.
- Clear instructions in {language} and real-world examples from an Indian context.
- An answer key with explanations.
- Extension activities for advanced learners and support activities for struggling learners.
- Teacher notes for using the sheet in a multi-grade classroom.
{visuals_line}
"""

# --- Visual aids ---

VISUAL_AID_PROMPT = """
Create a visual aid guide for teaching "{topic}" to grade {grade} {subject} students.
Language: {language}

**--- STRUCTURE ---**
1. Materials needed (chalk, markers, ruler and so on).
2. Step-by-step blackboard drawing instructions (4-5 steps, 10-15 minutes in total).
3. Key teaching points to emphasize.
4. Student engagement strategies and interactive elements.
5. Extension activities.

Focus on simple drawings a teacher with limited resources can replicate, plus memory aids and real-world connections.
"""

VISUAL_AID_PACKAGE_PROMPT = """
Create visual aid instructions for teaching "{topic}" to grade {grade} {subject} students.
Language: {language}

Your entire response MUST be a single JSON object with exactly these keys:
{{
  "instructions": "Step-by-step instructions for creating the visual aid",
  "materials": ["Materials needed"],
  "timeEstimate": "Estimated time to create",
  "difficulty": "Difficulty level for the teacher",
  "teachingTips": ["Tips for effective use in class"],
  "studentEngagement": ["Ways to involve students"],
  "variations": ["Adaptations for different learning styles"]
}}

Keep it practical for teachers with limited resources.
"""

VISUAL_AID_IMAGE_PROMPT = (
    "Educational diagram for {topic}, simple line drawing style, suitable for "
    "blackboard recreation, clear labels, educational illustration"
)

# --- Concept explanation ---

EXPLAIN_CONCEPT_PROMPT = """
Explain the following concept in simple terms for {difficulty} level students: {question}
{subject_line}

**--- STRUCTURE ---**
1. Simple definition (What is it?)
2. Step-by-step explanation (How does it work?)
3. Real-world examples from an Indian context (Where do we see this?)
4. Fun facts (Did you know?)
5. A simple experiment or activity (Try this!)
6. Memory tricks or mnemonics (Remember this!)

Make it conversational and engaging for young learners.
"""

ADAPTIVE_EXPLANATION_PROMPT = """
Provide an adaptive explanation for: {question}

**--- CONTEXT ---**
- Difficulty level: {difficulty}
- Subject: {subject}
- Language: {language}
- Student level: {student_level}
- Learning style preference: {learning_style}
- Previous questions: {previous_questions}

Your entire response MUST be a single JSON object with exactly these keys:
{{
  "explanation": "Explanation adapted to the student's level and learning style",
  "visualAids": ["Visual aids that would help explain this concept"],
  "activities": ["Hands-on activities to reinforce learning"],
  "assessmentQuestions": ["Questions to check understanding"],
  "nextTopics": ["Related topics to explore next"]
}}

Build on the previous questions, use examples from an Indian context and include a mnemonic.
"""

# --- Images, translation, games, learning paths ---

EDUCATIONAL_IMAGE_PROMPT = """
Educational illustration: {prompt}
Style: clean, simple {style} suitable for classroom use, aspect ratio {aspect_ratio}.
Clear bold lines visible from a distance, minimal text, appropriate for an Indian classroom.
Language context: {language}
"""

TRANSLATION_PROMPT = """
Translate the following educational content to {target_language}.
Maintain the educational context and cultural appropriateness.
Keep technical terms accurate and age-appropriate.

Content to translate:
{text}

Provide only the translation, maintaining the original formatting.
"""

EDUCATIONAL_GAME_PROMPT = """
Design a short {game_type} game for grade {grade} students at {difficulty} difficulty.
Subject: {subject}

{game_rules}

Your entire response MUST be a single JSON object with exactly these keys:
{{
  "title": "Game title",
  "instructions": "How to play, in one or two sentences",
  "questions": [
    {{"question": "...", "options": ["...", "...", "...", "..."], "answer": "...", "hint": "..."}}
  ],
  "timeLimit": 60
}}
Provide between 5 and 10 questions. "timeLimit" is in seconds.
"""

GAME_TYPE_RULES = {
    "math": "Each question is an arithmetic or reasoning problem with one numeric answer.",
    "puzzle": "Each question is a logic or pattern puzzle with one correct option.",
    "word": "Each question is a spelling, vocabulary or unscramble challenge with one correct word.",
}

LEARNING_PATH_PROMPT = """
Create a personalized learning path for a grade {grade} student.

**--- STUDENT PROFILE ---**
- Subjects: {subjects}
- Strengths: {strengths}
- Challenges: {challenges}
- Interests: {interests}

Duration: {duration}
Language: {language}

Your entire response MUST be a single JSON object with exactly these keys:
{{
  "path": [
    {{"week": 1, "topics": ["..."], "activities": ["..."], "assessments": ["..."], "resources": ["..."]}}
  ],
  "adaptations": ["Support for the listed challenges"],
  "parentGuidance": ["Ways parents can help at home"]
}}

Build on strengths, follow Indian curriculum guidelines and use the student's interests.
"""
