# pactverify/logging_tags.py
"""
Central place for defining logging subsystem tags.

Changing a tag here updates it project-wide.
"""

BUILDER = "[BUILDER]"
RESOLVER = "[RESOLVER]"
BROKER = "[BROKER]"
ENGINE = "[ENGINE]"
STATE = "[STATE]"
MATCHING = "[MATCHING]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
