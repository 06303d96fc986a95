import operator
from functools import reduce
from typing import Any, Callable, Dict, Iterator, Optional, Union

from .basic_types import FlagDefinition, NameStyle
from .config import default_app_config
from .flag_iterator import FlagIterator
from .flag_naming import flag_name_from_identifier, is_constant_identifier
from .structured_logger import StructuredLogger


class BinaryFlags:
    """
    Mixin that turns the UPPER_CASE integer constants of a class into a flag
    vocabulary, and gives each instance a mask to check, add and remove them.

        class Permissions(BinaryFlags):
            CAN_READ = 1
            CAN_WRITE = 2

        perms = Permissions().add_flag(Permissions.CAN_READ)
        perms.get_flag_names()   # "can read"

    Any integer is accepted as a mask or flag; bits that have no declared
    constant are kept but never named.
    """

    # lower case so these are never mistaken for flag constants
    mask: int = 0
    on_modify_callback: Optional[Callable[["BinaryFlags"], None]] = None
    flag_name_style: Optional[Union[NameStyle, str]] = None
    _cursor: Optional[FlagIterator] = None

    def __init__(self, mask: int = 0, on_modify: Optional[Callable[["BinaryFlags"], None]] = None):
        self.mask = mask
        self.on_modify_callback = None
        self._cursor = None
        if on_modify is not None:
            self.set_on_modify_callback(on_modify)

    # ----- flag discovery -----

    @classmethod
    def flag_name(cls, identifier: str, value: int) -> str:
        """Display name for a constant. Override to supply custom descriptions."""
        style = cls.flag_name_style or default_app_config.name_style
        return flag_name_from_identifier(identifier, style)

    @classmethod
    def flag_definitions(cls) -> Iterator[FlagDefinition]:
        """
        Yield a FlagDefinition for every integer constant declared on the class
        or its bases.  A subclass redefining a constant replaces the base value.
        Override to provide the vocabulary explicitly instead.
        """
        constants: Dict[str, int] = {}
        for klass in reversed(cls.__mro__):
            for identifier, value in vars(klass).items():
                if not is_constant_identifier(identifier):
                    continue
                if isinstance(value, bool) or not isinstance(value, int):
                    constants.pop(identifier, None)
                    continue
                constants[identifier] = int(value)

        for identifier, value in constants.items():
            yield FlagDefinition(value=value, name=cls.flag_name(identifier, value), identifier=identifier)

    @classmethod
    def get_all_flags(cls) -> Dict[int, str]:
        """Map of flag value to display name, ordered by value. Empty if the class can't be inspected."""
        try:
            definitions = list(cls.flag_definitions())
        except Exception as e:
            logger = StructuredLogger(__name__, prefix="BinaryFlags.get_all_flags()> ")
            logger.debug("flag discovery failed, treating as no flags", host=cls.__name__, error=repr(e))
            return {}

        flags = {}
        for definition in definitions:
            flags[definition.value] = definition.name
        return dict(sorted(flags.items()))

    @classmethod
    def get_all_flags_mask(cls) -> int:
        return reduce(operator.or_, cls.get_all_flags().keys(), 0)

    def get_flag_names(self, mask: Optional[int] = None, as_array: bool = False) -> Union[str, Dict[int, str]]:
        """
        Names of the declared flags present in mask (the instance mask by default),
        as a {flag: name} dict when as_array is set, otherwise joined with ", ".
        """
        if mask is None:
            mask = self.mask

        names = {flag: name for flag, name in self.get_all_flags().items() if mask & flag}

        return names if as_array else ", ".join(names.values())

    # ----- mutation -----

    def set_on_modify_callback(self, on_modify: Optional[Callable[["BinaryFlags"], None]]):
        if on_modify is not None and not callable(on_modify):
            raise TypeError(f"on_modify callback must be callable, got {type(on_modify).__name__}")
        self.on_modify_callback = on_modify

    def _on_modify(self, before: int):
        if before == self.mask:
            return
        logger = StructuredLogger(__name__, prefix=f"{type(self).__name__}._on_modify()> ")
        logger.debug2("mask changed", before=before, after=self.mask)
        if callable(self.on_modify_callback):
            self.on_modify_callback(self)

    def set_mask(self, mask: int):
        before = self.mask
        self.mask = mask
        self._on_modify(before)
        return self

    def get_mask(self) -> int:
        return self.mask

    def add_flag(self, flag: int):
        before = self.mask
        self.mask |= flag
        self._on_modify(before)
        return self

    def remove_flag(self, flag: int):
        before = self.mask
        self.mask &= ~flag
        self._on_modify(before)
        return self

    # ----- queries -----

    def check_flag(self, flag: int, match_all: bool = True) -> bool:
        """
        With match_all every bit of flag has to be set, otherwise one is enough.
        A zero flag is therefore always matched by match_all and never without it.
        """
        result = self.mask & flag
        return result == flag if match_all else result > 0

    def check_any_flag(self, flag: int) -> bool:
        return self.check_flag(flag, False)

    def count(self) -> int:
        """Number of set bits within the configured mask width."""
        count = 0
        mask = self.mask & ((1 << default_app_config.MASK_WIDTH) - 1)

        while mask != 0:
            if (mask & 1) == 1:
                count += 1
            mask >>= 1

        return count

    # ----- iteration -----

    def _name_of_bit(self, bit: int) -> str:
        return self.get_flag_names(bit)

    def iter_flags(self) -> FlagIterator:
        """A new cursor over the bits set right now, independent of this instance's own cursor."""
        return FlagIterator(self.mask, self._name_of_bit, width=default_app_config.MASK_WIDTH)

    def start(self):
        self._cursor = self.iter_flags()
        self._cursor.start()

    def has_current(self) -> bool:
        return self._cursor is not None and self._cursor.has_current()

    def current(self) -> str:
        return self.get_flag_names(self.current_key())

    def current_key(self) -> int:
        return self._cursor.current_key() if self._cursor is not None else 0

    def advance(self):
        if self._cursor is None:
            return
        # the instance cursor follows the live mask
        self._cursor.mask = self.mask
        self._cursor.advance()

    # ----- serialization -----

    def json_serialize(self) -> Dict[str, Any]:
        return {'mask': self.mask}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(mask=data.get('mask', 0))

    # ----- python protocols -----

    def __iter__(self) -> FlagIterator:
        return self.iter_flags()

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        # an empty mask must not make the host falsy
        return True

    def __contains__(self, flag: int) -> bool:
        return self.check_flag(flag)

    def __int__(self) -> int:
        return self.mask

    def __repr__(self):
        names = self.get_flag_names()
        return f"<{type(self).__name__} mask={self.mask:#x} flags=[{names}]>"
