"""Shared constants: rule registry prefix and message codes."""

DEMETER_PREFIX: str = "demeter."

LAW_OF_DEMETER_CODE: str = "W9501"
REPLACE_INSTANCE_VARIABLE_CODE: str = "W9502"

ALL_CODES: tuple[str, ...] = (LAW_OF_DEMETER_CODE, REPLACE_INSTANCE_VARIABLE_CODE)
