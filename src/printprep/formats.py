"""Named print formats: nominal metric sizes and their exact imperial equivalents."""

from __future__ import annotations

from types import MappingProxyType

from printprep.sizes import Size, parse_size


class PrintFormatError(ValueError):
    """Raised when a print format can't be resolved, e.g. a dimension is missing."""


def _both_orientations(pairs: dict[str, str]) -> dict[str, str]:
    formats: dict[str, str] = {}
    for metric, imperial in pairs.items():
        formats[metric] = imperial
        metric_w, metric_h = metric.split("/")
        imperial_w, imperial_h = imperial.split("/")
        formats[f"{metric_h}/{metric_w}"] = f"{imperial_h}/{imperial_w}"
    return formats


# Photo labs print the nominal metric formats on imperial paper.
PRINT_FORMATS = MappingProxyType(
    _both_orientations(
        {
            "13cm/9cm": "5in/3.5in",
            "15cm/10cm": "6in/4in",
            "18cm/13cm": "7in/5in",
            "21cm/15cm": "8.5in/6in",
            "24cm/18cm": "9.5in/7in",
            "30cm/20cm": "12in/8in",
            "40cm/30cm": "16in/12in",
            "45cm/30cm": "18in/12in",
        }
    )
)


def to_print_format(size: Size) -> Size:
    """Replace a nominal metric format by its exact imperial print format.

    The lookup is on the exact string form of ``size``; sizes not in the
    table are returned unchanged. Use millimeters (``150mm/100mm``) to opt
    out of the replacement.
    """

    key = str(size)
    if not size.is_complete():
        raise PrintFormatError(f"Unable to determine print size. Missing dimension in size {key}")

    replacement = PRINT_FORMATS.get(key)
    if replacement is None:
        return size
    return parse_size(replacement)
