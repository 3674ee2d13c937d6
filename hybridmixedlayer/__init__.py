from .hybridmixedlayer import hybridmixedlayer
from .holtetalley import mld, ResultMLD, Decision
from .options import MLDOptionError, DEFAULTS
