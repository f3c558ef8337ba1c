# Schemas package (re-export feature modules for stable imports)
from .startup.startup import *
from .design.design import *
from .chat.chat import *
from .profiles.profile import *
from .common.common import *
