# src/schemas/__init__.py
from .base_schemas import *
from .patient_schemas import *
from .screening_schemas import *
from .follow_up_schemas import *
from .user_schemas import *
