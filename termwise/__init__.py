# -*- coding: utf-8 -*
"""Termwise arithmetic and math functions for containers and lazy views.

See ``dir(termwise)`` and submodule docstrings for more.
"""

__version__ = '0.1.0'

from .capability import *  # noqa: F401, F403
from .views import *  # noqa: F401, F403
from .ops import *  # noqa: F401, F403
from .mathfun import *  # noqa: F401, F403

# HACK: break dependency loop
from .views import _init_module
_init_module()
del _init_module
