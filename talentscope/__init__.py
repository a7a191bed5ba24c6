"""
TalentScope: hierarchical visibility and reporting engine for a
recruitment pipeline tracker.
"""

from talentscope.utils.constants import APP_NAME, VERSION

__app_name__ = APP_NAME
__version__ = VERSION
