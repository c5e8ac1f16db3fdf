"""Profile Merge Stage - Aggregate per-document StyleProfiles.

Fonts and colors are ranked by document frequency (how many profiles list
the value), rewarding consistency across documents over dominance within
one. Numeric fields are unweighted means. Sample text is concatenated in
input order and truncated, so earlier documents survive truncation.
"""

from collections import Counter
from statistics import fmean
from typing import Iterable, Optional, Sequence

from docstyle.exceptions import EmptyInputError
from docstyle.models import (
    DEFAULT_FONT,
    ColorSample,
    Emphasis,
    FontSizes,
    Margins,
    MergedStyleProfile,
    Punctuation,
    StyleProfile,
)

from .rounding import round_half_up

SAMPLE_SEPARATOR = "\n\n"


def document_frequency(groups: Iterable[Sequence[str]]) -> Counter:
    """Count in how many groups each value appears."""
    counts: Counter = Counter()
    for group in groups:
        counts.update(dict.fromkeys(group, 1))
    return counts


class ProfileMerger:
    """Combines N StyleProfiles into one MergedStyleProfile."""

    def __init__(
        self,
        max_fonts: int = 6,
        max_colors: int = 8,
        max_sample_chars: int = 12000,
        default_font: str = DEFAULT_FONT,
    ):
        self.max_fonts = max_fonts
        self.max_colors = max_colors
        self.max_sample_chars = max_sample_chars
        self.default_font = default_font

    def merge(self, profiles: Sequence[StyleProfile], source: Optional[str] = None) -> MergedStyleProfile:
        """Merge profiles into an aggregate.

        Raises:
            EmptyInputError: ``profiles`` is empty.
        """
        profiles = list(profiles)
        if not profiles:
            raise EmptyInputError()

        font_ranking = [f for f, _ in document_frequency(p.fonts for p in profiles).most_common()]
        color_counts = document_frequency(p.colors for p in profiles).most_common(self.max_colors)

        def mean_of(getter) -> float:
            return fmean(getter(p) for p in profiles)

        primary = font_ranking[0] if font_ranking else self.default_font
        secondary = font_ranking[1] if len(font_ranking) > 1 else primary

        return MergedStyleProfile(
            source=source,
            doc_count=len(profiles),
            pages=sum(p.pages for p in profiles),
            fonts=tuple(font_ranking[: self.max_fonts]),
            primary_font=primary,
            secondary_font=secondary,
            sizes=FontSizes(
                body=round_half_up(mean_of(lambda p: p.sizes.body), 1),
                heading=round_half_up(mean_of(lambda p: p.sizes.heading), 1),
                avg=round_half_up(mean_of(lambda p: p.sizes.avg), 1),
            ),
            colors=tuple(hex_code for hex_code, _ in color_counts),
            colors_detailed=tuple(ColorSample(hex=h, hits=n) for h, n in color_counts),
            emphasis=Emphasis(bold_ratio=round_half_up(mean_of(lambda p: p.emphasis.bold_ratio), 2)),
            punctuation=Punctuation(
                **{
                    name: round_half_up(mean_of(lambda p, n=name: getattr(p.punctuation, n)))
                    for name in Punctuation.model_fields
                }
            ),
            margins=Margins(
                **{
                    side: round_half_up(mean_of(lambda p, s=side: getattr(p.margins, s)))
                    for side in Margins.model_fields
                }
            ),
            sample_text=SAMPLE_SEPARATOR.join(
                p.sample_text for p in profiles if p.sample_text
            )[: self.max_sample_chars],
        )
