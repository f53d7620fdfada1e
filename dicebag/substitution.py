"""Replace ``{{expr}}`` placeholders in free text with rolled totals."""

from __future__ import annotations

from dicebag.config import settings
from dicebag.evaluator import evaluate
from dicebag.expressions import BRACED_EXPRESSION_RE
from dicebag.sampler import Sampler


def roll_string(text: str, sampler: Sampler | None = None) -> str:
    """Roll every braced expression in ``text`` and substitute its total.

    ``"Hit for {{1d1+3}} damage"`` becomes ``"Hit for 4 damage"``. At most
    ``settings.max_substitutions`` placeholders are replaced; a placeholder
    whose expression fails to evaluate is left as written.
    """
    if sampler is None:
        sampler = Sampler()

    rendered = text
    for count, match in enumerate(BRACED_EXPRESSION_RE.finditer(text)):
        if count >= settings.max_substitutions:
            break
        placeholder = match.group(0)
        result = evaluate(placeholder[2:-2].strip(), sampler)
        if not result.ok:
            continue
        rendered = rendered.replace(placeholder, str(result.total), 1)
    return rendered
