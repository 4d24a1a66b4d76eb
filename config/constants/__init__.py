# Config Constants Package
# Import everything from sub-modules for easy access:
#   from config.constants import PAGINATION_DEFAULT, MSG_JOB_APPROVED, etc.

from .branding import *
from .limits import *
from .messages import *
