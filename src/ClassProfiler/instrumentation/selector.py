# ============================================================================
# ClassProfiler - Member Selector
#
# Purpose: Choose which methods of a class are eligible for instrumentation
# Inputs: Class, visibility policy, inheritance flag, member kind
# Outputs: Ordered list of method names
# Dependencies: enum, inspect
# Usage: names = select_members(MyClass, visibility="all", include_inherited=False)
#
# Changelog:
#   2026-09-02: Initial selector for instance methods
#   2026-09-09: Class-level selection (classmethod/staticmethod)
#   2026-09-28: Dunder protocol methods classified public; reserved sets
#               narrowed to identity/reflection/dispatch/lifecycle names
# ============================================================================

from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple, Union
import inspect

from ClassProfiler.logging_utils import get_logger

logger = get_logger(__name__)

# Names starting with this prefix belong to shim bookkeeping
INTERNAL_PREFIX = "_profiler_"

# Members declared in this module are the framework's own mix-in API
FRAMEWORK_MODULE = "ClassProfiler.mixins"


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ALL = "all"


class MemberKind(str, Enum):
    INSTANCE = "instance"
    CLASS = "class"


# Never wrapped on instances: wrapping these recurses or breaks the object model
RESERVED_INSTANCE_METHODS = frozenset(
    {
        "__new__",
        "__init__",
        "__del__",
        "__init_subclass__",
        "__class__",
        "__getattribute__",
        "__getattr__",
        "__setattr__",
        "__delattr__",
        "__dir__",
        "__repr__",
        "__str__",
        "__format__",
        "__hash__",
        "__eq__",
        "__ne__",
        "__sizeof__",
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__copy__",
        "__deepcopy__",
        "__get__",
        "__set__",
        "__delete__",
        "__set_name__",
        "__instancecheck__",
        "__subclasscheck__",
        "__subclasshook__",
        "__class_getitem__",
    }
)

# Never wrapped on the class itself
RESERVED_CLASS_METHODS = frozenset(
    {
        "__new__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__prepare__",
        "__instancecheck__",
        "__subclasscheck__",
        "mro",
        "register",
    }
)


def _coerce_visibility(visibility: Union[Visibility, str, None]) -> Visibility:
    if isinstance(visibility, Visibility):
        return visibility
    try:
        return Visibility(str(visibility).lower())
    except ValueError:
        logger.debug(f"Unknown visibility {visibility!r}; using 'public'")
        return Visibility.PUBLIC


def _coerce_kind(kind: Union[MemberKind, str]) -> MemberKind:
    if isinstance(kind, MemberKind):
        return kind
    try:
        return MemberKind(str(kind).lower())
    except ValueError:
        logger.debug(f"Unknown member kind {kind!r}; using 'instance'")
        return MemberKind.INSTANCE


def classify_visibility(name: str, owner: type) -> Visibility:
    """
    Derive a member's visibility from Python naming conventions.

    ``__name`` declared in a class body is mangled to ``_Owner__name`` and
    counts as private; any other leading underscore is protected. Dunder
    protocol methods (``__len__``) are public.

    Args:
        name: Attribute name as stored in the class ``__dict__``
        owner: Class that declares the attribute

    Returns:
        PUBLIC, PROTECTED or PRIVATE
    """
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    mangled = f"_{owner.__name__.lstrip('_')}__"
    if owner.__name__.strip("_") and name.startswith(mangled):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def is_framework_owner(owner: type) -> bool:
    """True when the class is one of this package's own mix-ins."""
    module = getattr(owner, "__module__", None) or ""
    return module == FRAMEWORK_MODULE or module.startswith(FRAMEWORK_MODULE + ".")


def _matches_kind(raw: Any, kind: MemberKind) -> bool:
    if kind is MemberKind.CLASS:
        return isinstance(raw, (classmethod, staticmethod))
    return inspect.isfunction(raw)


def iter_members(cls: type, include_inherited: bool = True) -> Iterator[Tuple[str, type, Any]]:
    """
    Yield ``(name, owner, raw_attribute)`` for every attribute visible on ``cls``.

    Walks the MRO (``object`` excluded) so the first declaration of a name
    wins; with ``include_inherited=False`` only ``cls.__dict__`` is read.
    """
    seen = set()
    owners = [c for c in cls.__mro__ if c is not object] if include_inherited else [cls]
    for owner in owners:
        for name, raw in list(vars(owner).items()):
            if name in seen:
                continue
            seen.add(name)
            yield name, owner, raw


def select_members(
    cls: type,
    visibility: Union[Visibility, str, None] = Visibility.PUBLIC,
    include_inherited: bool = True,
    kind: Union[MemberKind, str] = MemberKind.INSTANCE,
) -> List[str]:
    """
    Select method names by visibility and inheritance, excluding reserved names.

    Args:
        cls: Class to inspect
        visibility: "public", "protected", "private" or "all"; anything else is "public"
        include_inherited: Include methods declared on ancestors
        kind: "instance" for plain methods, "class" for classmethods/staticmethods

    Returns:
        Method names ordered by MRO then declaration order
    """
    wanted = _coerce_visibility(visibility)
    member_kind = _coerce_kind(kind)
    reserved = RESERVED_CLASS_METHODS if member_kind is MemberKind.CLASS else RESERVED_INSTANCE_METHODS

    names: List[str] = []
    for name, owner, raw in iter_members(cls, include_inherited=bool(include_inherited)):
        if not _matches_kind(raw, member_kind):
            continue
        if name in reserved or name.startswith(INTERNAL_PREFIX):
            continue
        if is_framework_owner(owner):
            continue
        if wanted is not Visibility.ALL and classify_visibility(name, owner) is not wanted:
            continue
        names.append(name)

    logger.debug(
        f"Selected {len(names)} {member_kind.value} method(s) on {cls.__qualname__} "
        f"(visibility={wanted.value}, include_inherited={bool(include_inherited)})"
    )
    return names


def select_instance_methods(
    cls: type,
    visibility: Union[Visibility, str, None] = Visibility.PUBLIC,
    include_inherited: bool = True,
) -> List[str]:
    """Instance methods eligible for wrapping."""
    return select_members(cls, visibility, include_inherited, MemberKind.INSTANCE)


def select_class_methods(
    cls: type,
    visibility: Union[Visibility, str, None] = Visibility.PUBLIC,
    include_inherited: bool = True,
) -> List[str]:
    """Classmethods and staticmethods eligible for wrapping."""
    return select_members(cls, visibility, include_inherited, MemberKind.CLASS)


def select_by_flags(
    cls: type,
    inherited: bool = False,
    public: bool = True,
    protected: bool = True,
    private: bool = True,
    kind: Union[MemberKind, str] = MemberKind.INSTANCE,
) -> List[str]:
    """
    Union of per-visibility selections, the shape used by ``track_*`` setup calls.

    Returns:
        Names in first-seen order, without duplicates
    """
    flags: Dict[Visibility, bool] = {
        Visibility.PUBLIC: public,
        Visibility.PROTECTED: protected,
        Visibility.PRIVATE: private,
    }
    names: List[str] = []
    for visibility, enabled in flags.items():
        if not enabled:
            continue
        for name in select_members(cls, visibility, inherited, kind):
            if name not in names:
                names.append(name)
    return names
