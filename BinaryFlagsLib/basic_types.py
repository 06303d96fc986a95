from dataclasses import dataclass
from enum import Enum


MASK_WIDTH = 64


@dataclass(frozen=True)
class FlagDefinition:
    """A named flag constant declared by a host class."""
    value: int
    name: str
    identifier: str = ""


class NameStyle(Enum):
    """How a flag's display name is derived from its constant identifier."""
    WORDS = "words"        # IS_PC -> "is pc"
    PASCAL = "pascal"      # IS_PC -> "IsPc"
    CONSTANT = "constant"  # IS_PC -> "IS_PC"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None


class Bits:
    """Generic vocabulary: BIT_1 is the lowest bit, BIT_64 the highest."""
    BIT_1 = 1 << 0
    BIT_2 = 1 << 1
    BIT_3 = 1 << 2
    BIT_4 = 1 << 3
    BIT_5 = 1 << 4
    BIT_6 = 1 << 5
    BIT_7 = 1 << 6
    BIT_8 = 1 << 7
    BIT_9 = 1 << 8
    BIT_10 = 1 << 9
    BIT_11 = 1 << 10
    BIT_12 = 1 << 11
    BIT_13 = 1 << 12
    BIT_14 = 1 << 13
    BIT_15 = 1 << 14
    BIT_16 = 1 << 15
    BIT_17 = 1 << 16
    BIT_18 = 1 << 17
    BIT_19 = 1 << 18
    BIT_20 = 1 << 19
    BIT_21 = 1 << 20
    BIT_22 = 1 << 21
    BIT_23 = 1 << 22
    BIT_24 = 1 << 23
    BIT_25 = 1 << 24
    BIT_26 = 1 << 25
    BIT_27 = 1 << 26
    BIT_28 = 1 << 27
    BIT_29 = 1 << 28
    BIT_30 = 1 << 29
    BIT_31 = 1 << 30
    BIT_32 = 1 << 31
    BIT_33 = 1 << 32
    BIT_34 = 1 << 33
    BIT_35 = 1 << 34
    BIT_36 = 1 << 35
    BIT_37 = 1 << 36
    BIT_38 = 1 << 37
    BIT_39 = 1 << 38
    BIT_40 = 1 << 39
    BIT_41 = 1 << 40
    BIT_42 = 1 << 41
    BIT_43 = 1 << 42
    BIT_44 = 1 << 43
    BIT_45 = 1 << 44
    BIT_46 = 1 << 45
    BIT_47 = 1 << 46
    BIT_48 = 1 << 47
    BIT_49 = 1 << 48
    BIT_50 = 1 << 49
    BIT_51 = 1 << 50
    BIT_52 = 1 << 51
    BIT_53 = 1 << 52
    BIT_54 = 1 << 53
    BIT_55 = 1 << 54
    BIT_56 = 1 << 55
    BIT_57 = 1 << 56
    BIT_58 = 1 << 57
    BIT_59 = 1 << 58
    BIT_60 = 1 << 59
    BIT_61 = 1 << 60
    BIT_62 = 1 << 61
    BIT_63 = 1 << 62
    BIT_64 = 1 << 63
