"""
Behave environment configuration

This file is run before and after scenarios to set up and tear down
the test environment.
"""

import os
import sys

# Add project root to Python path so we can import odm_wiring
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from odm_wiring.logging_config import ElementDepth  # noqa: E402


def before_scenario(context, scenario):
    """Start every scenario with an empty registry and no pending error"""
    ElementDepth.reset()
    for name in ("reader", "registry", "error", "scanner"):
        if hasattr(context, name):
            delattr(context, name)
