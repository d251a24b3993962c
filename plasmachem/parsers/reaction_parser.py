"""Parser for the line-oriented reaction list format.

One reaction per line::

    e + Ar -> e + Ar* : EEDF (C2_Ar_Excitation_11.50_eV) [11.5]
    Ar* + Ar* -> Ar+ + Ar + e : 6.2e-10
    e + Ar+ -> Ar : {8.75e-27*(Te/11604)^(-4.5)} [elastic]

Left of the first ``:`` is the reaction, right of it the rate
coefficient followed by optional regions: ``[...]`` threshold energy or
``elastic``, ``(...)`` the name of a tabulated rate file and ``{...}`` a
rate expression. Lines starting with ``#`` are comments.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

from ..errors import OutOfRangeError, RateParseError, ReactionSyntaxError
from ..reactions import ConstantRate, ExpressionRate, Rate, Reaction, TabulatedRate
from .base_parser import BaseParser

logger = logging.getLogger(__name__)

ONE_WAY_ARROWS = ("=", "->", "=>")
REVERSIBLE_ARROWS = ("<=>", "<->")
ARROWS = ONE_WAY_ARROWS + REVERSIBLE_ARROWS

EEDF_KEYWORD = "EEDF"
ELASTIC_KEYWORD = "elastic"

_REAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")
_NON_FINITE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)


@dataclass
class RawReaction:
    """The regions of one reaction line, as text."""

    line: str
    line_number: Optional[int]
    expression: str
    rate_text: str
    threshold: Optional[str] = None
    identifier: Optional[str] = None
    equation: Optional[str] = None


def split_reaction_lines(text: str) -> list[tuple[int, str]]:
    """Return ``(line_number, line)`` for every reaction line in ``text``.

    Blank lines and lines whose first non-blank character is ``#`` are
    dropped. Line numbers are 1-based positions in ``text``.
    """
    lines = []
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append((number, line))
    return lines


class ReactionParser(BaseParser):
    """Parser for plasma chemistry reaction lists."""

    def __init__(self):  # noqa
        super().__init__("reactions")

    def parse_network(self, text: str) -> list[Reaction]:
        """Parse every reaction in ``text``, keeping input order."""
        reactions = [
            self.parse_reaction(line, number) for number, line in split_reaction_lines(text)
        ]
        logger.debug("Parsed %d reactions", len(reactions))
        return reactions

    def parse_reaction(self, line: str, line_number: int | None = None) -> Reaction:
        """Parse a single reaction line into a Reaction."""
        raw = self.split_regions(line, line_number)
        rate = self.classify_rate(raw)
        reactants, products, reversible = self.decompose(raw)
        threshold_energy, elastic = self.parse_threshold(raw)
        return Reaction(
            reactants=reactants,
            products=products,
            rate=rate,
            threshold_energy=threshold_energy,
            elastic=elastic,
            reversible=reversible,
            energy_changes=raw.threshold is not None,
            line_number=line_number,
        )

    def split_regions(self, line: str, line_number: int | None = None) -> RawReaction:
        """Cut a line into the reaction, the rate text and the optional regions."""
        line = line.strip()
        colon = line.find(":")
        if colon < 0:
            raise ReactionSyntaxError(
                "Missing ':' between the reaction and its rate coefficient.", line, line_number
            )
        expression = line[:colon].strip()
        rest = line[colon + 1 :]

        # Mask the expression first so parentheses inside it are left alone.
        equation, rest, brace_start = self._take_region(rest, "{", "}", line, line_number)
        threshold, rest, bracket_start = self._take_region(rest, "[", "]", line, line_number)
        if threshold is not None and ("(" in threshold or ")" in threshold):
            raise ReactionSyntaxError(
                "'(' found inside the threshold energy region '[...]'.", line, line_number
            )
        identifier, rest, paren_start = self._take_region(rest, "(", ")", line, line_number)

        starts = [p for p in (brace_start, bracket_start, paren_start) if p is not None]
        end = min(starts, default=len(rest))
        rate_text = rest[:end].strip()
        leftover = rest[end:].strip()
        if leftover:
            raise ReactionSyntaxError(
                f"Unexpected text '{leftover}' after the rate coefficient.", line, line_number
            )
        if not rate_text and equation is None:
            raise ReactionSyntaxError("Missing rate coefficient.", line, line_number)

        return RawReaction(
            line=line,
            line_number=line_number,
            expression=expression,
            rate_text=rate_text,
            threshold=threshold,
            identifier=identifier,
            equation=equation,
        )

    def _take_region(self, text, opening, closing, line, line_number):
        """Extract one ``opening ... closing`` region and blank it out of ``text``.

        Returns the trimmed region content (None if absent), the text with
        the region replaced by spaces and the position it started at.
        """
        start = text.find(opening)
        if start < 0:
            if closing in text:
                raise ReactionSyntaxError(
                    f"Unbalanced '{closing}' without '{opening}'.", line, line_number
                )
            return None, text, None
        end = text.find(closing, start + 1)
        if end < 0:
            raise ReactionSyntaxError(
                f"Unbalanced '{opening}' without '{closing}'.", line, line_number
            )
        content = text[start + 1 : end].strip()
        text = text[:start] + " " * (end - start + 1) + text[end + 1 :]
        if opening in text or closing in text:
            raise ReactionSyntaxError(
                f"Unbalanced or repeated '{opening}...{closing}' region.", line, line_number
            )
        if not content:
            raise ReactionSyntaxError(
                f"Empty '{opening}{closing}' region.", line, line_number
            )
        return content, text, start

    def classify_rate(self, raw: RawReaction) -> Rate:
        """Pick the rate coefficient kind: expression, then EEDF, then constant."""
        if raw.equation is not None:
            return ExpressionRate(raw.equation)
        if raw.rate_text == EEDF_KEYWORD:
            return TabulatedRate(raw.identifier)
        return ConstantRate(self._parse_rate_value(raw))

    def _parse_rate_value(self, raw: RawReaction) -> float:
        where = f"\n  line {raw.line_number}: {raw.line}"
        if _NON_FINITE.fullmatch(raw.rate_text):
            raise OutOfRangeError(
                f"Rate coefficient '{raw.rate_text}' is not a finite number." + where
            )
        if not _REAL.fullmatch(raw.rate_text):
            raise RateParseError(
                f"Rate coefficient '{raw.rate_text}' is invalid! "
                "There are three rate coefficient types that are accepted:\n"
                "  1. Constant (A + B -> C  : 10)\n"
                "  2. Equation (A + B -> C  : {1e-4*exp(10)})\n"
                "  3. EEDF     (A + B -> C  : EEDF)" + where
            )
        value = float(raw.rate_text)
        if not math.isfinite(value):
            raise OutOfRangeError(
                f"Rate coefficient '{raw.rate_text}' is out of range for a float." + where
            )
        return value

    def parse_threshold(self, raw: RawReaction) -> tuple[float, bool]:
        """Return ``(threshold_energy, elastic)`` from the bracket region."""
        if raw.threshold is None:
            return 0.0, False
        if raw.threshold == ELASTIC_KEYWORD:
            return 0.0, True
        if _NON_FINITE.fullmatch(raw.threshold):
            raise OutOfRangeError(
                f"Threshold energy '{raw.threshold}' is not a finite number."
                f"\n  line {raw.line_number}: {raw.line}"
            )
        if not _REAL.fullmatch(raw.threshold):
            raise ReactionSyntaxError(
                f"Threshold energy '{raw.threshold}' is neither a number nor 'elastic'.",
                raw.line,
                raw.line_number,
            )
        value = float(raw.threshold)
        if not math.isfinite(value):
            raise OutOfRangeError(
                f"Threshold energy '{raw.threshold}' is out of range for a float."
                f"\n  line {raw.line_number}: {raw.line}"
            )
        return value, False

    def decompose(self, raw: RawReaction) -> tuple[list[str], list[str], bool]:
        """Split the reaction into reactants and products.

        ``+`` tokens are dropped and repeated species are kept, so
        ``A + A -> B`` gives reactants ``[A, A]``.
        """
        reactants: list[str] = []
        products: list[str] = []
        arrow = None
        side = reactants
        for token in _WHITESPACE.split(raw.expression):
            if token in ARROWS:
                if arrow is not None:
                    raise ReactionSyntaxError(
                        "More than one arrow in reaction.", raw.line, raw.line_number
                    )
                arrow = token
                side = products
                continue
            name = self._clean_species_name(token)
            if name is not None:
                side.append(name)

        if arrow is None:
            raise ReactionSyntaxError(
                f"No arrow found in reaction. Use one of: {' '.join(ARROWS)}",
                raw.line,
                raw.line_number,
            )
        if not reactants:
            raise ReactionSyntaxError("Reaction has no reactants.", raw.line, raw.line_number)
        if not products:
            raise ReactionSyntaxError("Reaction has no products.", raw.line, raw.line_number)
        return reactants, products, arrow in REVERSIBLE_ARROWS
