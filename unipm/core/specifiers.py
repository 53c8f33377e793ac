from typing import List, Union

JSR_PREFIX = "jsr:"
NPM_PREFIX = "npm:"

Args = Union[str, List[str]]


def split_args(value: Args) -> List[str]:
    """Accepts "a b c" or ["a", "b", "c"]."""
    if isinstance(value, str):
        return value.split()
    return list(value)


def is_jsr(module: str) -> bool:
    return module.startswith(JSR_PREFIX)


def to_jsr(module: str) -> str:
    return f"{JSR_PREFIX}{un_jsr(module)}"


def un_jsr(module: str) -> str:
    # "jsr:jsr:x" is still x
    while is_jsr(module):
        module = module[len(JSR_PREFIX):]
    return module


def to_npm(module: str) -> str:
    return module if module.startswith(NPM_PREFIX) else f"{NPM_PREFIX}{module}"


def un_npm(module: str) -> str:
    return module[len(NPM_PREFIX):] if module.startswith(NPM_PREFIX) else module
