from app.models.platform import Platform
from app.models.review import Review
from app.models.predefined_tag import PredefinedTag
from app.models.admin import Admin
