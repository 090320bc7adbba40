"""Language tag value type backed by the langcodes library."""

from dataclasses import dataclass

import langcodes


class LanguageTagError(ValueError):
    """Raised when a string is not a well-formed language tag."""


@dataclass(frozen=True, slots=True)
class LanguageTag:
    """A syntactically valid language identifier, such as ``en`` or ``pt-BR``.

    Attributes:
        tag: The tag in canonical casing.
    """

    tag: str

    @classmethod
    def parse(cls, s: str) -> "LanguageTag":
        """Parse a language tag.

        Args:
            s: The tag to parse.

        Returns:
            The parsed tag.

        Raises:
            LanguageTagError: If the string is not a well-formed tag.
        """
        stripped = s.strip()
        if not stripped:
            raise LanguageTagError("Language tag must not be empty.")
        if stripped == "*":
            return cls("*")
        try:
            language = langcodes.Language.get(stripped, normalize=False)
        except ValueError as e:
            raise LanguageTagError(f"'{s}' is not a well-formed language tag.") from e
        return cls(language.to_tag())

    def matches(self, candidate: "LanguageTag") -> bool:
        """Check whether this tag, used as a preference, matches ``candidate``.

        Basic filtering: the preference matches when it equals the candidate
        or is a subtag prefix of it (``en`` matches ``en-GB``). The wildcard
        ``*`` matches every tag.

        Args:
            candidate: The tag to test.

        Returns:
            True if the candidate satisfies this preference.
        """
        if self.tag == "*":
            return True
        preference = self.tag.lower().split("-")
        subtags = candidate.tag.lower().split("-")
        return subtags[: len(preference)] == preference

    def __str__(self) -> str:
        return self.tag
