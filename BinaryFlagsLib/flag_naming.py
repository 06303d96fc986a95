import re
from typing import Union

from .basic_types import NameStyle


CONSTANT_IDENTIFIER = re.compile(r"^[A-Z][A-Z0-9_]*$")


def is_constant_identifier(identifier: str) -> bool:
    return bool(CONSTANT_IDENTIFIER.match(identifier))


def flag_name_from_identifier(identifier: str, style: Union[NameStyle, str] = NameStyle.WORDS) -> str:
    """
    Turn a constant identifier into a display name.

    WORDS:    CAN_DUAL_WIELD -> "can dual wield"
    PASCAL:   CAN_DUAL_WIELD -> "CanDualWield"
    CONSTANT: CAN_DUAL_WIELD -> "CAN_DUAL_WIELD"
    """
    style = NameStyle(style)
    if style == NameStyle.CONSTANT:
        return identifier

    words = [word for word in identifier.lower().split("_") if word]
    if style == NameStyle.PASCAL:
        return "".join(word[:1].upper() + word[1:] for word in words)
    return " ".join(words)
