# /sahayak-backend/app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here guarantees
# that `Base.metadata` knows every table before `create_all` runs and when
# alembic compares the models against a database.

from .base_class import Base

from .models.teacher_models import Teacher
from .models.student_models import Student, Assessment
from .models.content_models import GeneratedContent, LessonPlan
