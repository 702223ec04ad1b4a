from .base_schemas import *
from .patient_schemas import *
from .family_member_schemas import *
from .medical_history_schemas import *
from .consultation_schemas import *
from .medical_report_schemas import *
from .dental_image_schemas import *
from .report_schemas import *
from .query_schemas import *
from .storage_schemas import *
