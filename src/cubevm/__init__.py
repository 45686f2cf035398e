"""
cubevm: an embeddable bytecode engine for cubelang.

Public API re-exports from kernel/ (machinery) and lib/ (sample natives).
"""
import logging

from .kernel import *  # noqa: F401, F403
from .kernel import __all__ as _kernel_all
from .lib import install_std, std_natives

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = list(_kernel_all) + ["install_std", "std_natives"]
