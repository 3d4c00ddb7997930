"""Composite identity of a classifier inside a classifier set or run."""
from dataclasses import dataclass
from typing import List, Sequence

from metadata_manager.common.common import CLASSIFIER_NAME_CONFIG_SEPARATOR


class MalformedInputError(ValueError):
    """A classifier identity could not be split into name and configuration."""
    pass


@dataclass(frozen=True, order=True)
class ClassifierKey:
    """A classifier name together with its serialized configuration.

    Keys sort by name first and configuration second, which is the order
    classifier set members are reported in. The joined text form
    ``"<name> with configuration: <configuration>"`` is only used where
    keys leave the package (column labels, stored representations of
    other tools); it must not be used for identity inside the package.
    """
    classifier_name: str
    configuration: str

    def __str__(self) -> str:
        return f"{self.classifier_name}{CLASSIFIER_NAME_CONFIG_SEPARATOR}{self.configuration}"

    @classmethod
    def parse(cls, text: str) -> "ClassifierKey":
        """Split a joined classifier string.

        Raises:
            MalformedInputError: If the separator is missing.
        """
        name, separator, configuration = text.partition(CLASSIFIER_NAME_CONFIG_SEPARATOR)
        if not separator:
            raise MalformedInputError(
                f"'{text}' does not contain the separator '{CLASSIFIER_NAME_CONFIG_SEPARATOR}'"
            )
        return cls(name, configuration)

    @classmethod
    def coerce(cls, value) -> "ClassifierKey":
        """Accept a key, a (name, configuration) pair or a joined string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if len(value) != 2:
            raise MalformedInputError(f"Expected a (name, configuration) pair, got {value!r}")
        name, configuration = value
        return cls(name, configuration)


def options_to_string(options: Sequence[str]) -> str:
    """Serialize a classifier option list as ``"[opt1, opt2]"``."""
    return "[" + ", ".join(options) + "]"


def options_from_string(serialized: str) -> List[str]:
    """Inverse of :func:`options_to_string`."""
    inner = serialized.strip()
    if not (inner.startswith("[") and inner.endswith("]")):
        raise MalformedInputError(f"'{serialized}' is not a bracketed option list")
    inner = inner[1:-1]
    if not inner.strip():
        return []
    return [option.strip() for option in inner.split(",")]
