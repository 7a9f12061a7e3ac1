"""Collapse conflicting utility classes so the last one wins.

Utility-first CSS frameworks express one property per class, so
``"text-sm text-lg"`` sets the font size twice. :func:`reconcile_classes`
groups classes by the CSS property they target, scoped by their variants
(``hover:``, ``md:``) and the ``!`` important modifier, and keeps only the
last class in each group. Shorthand groups also knock out their longhand
siblings that appear earlier (``px-2 p-4`` keeps ``p-4`` only). Classes the
classifier does not recognise are kept, with exact duplicates collapsed.

Examples
--------
>>> from sitespec.styles.reconcile import reconcile_classes
>>> reconcile_classes("text-sm font-bold", "text-lg")
'font-bold text-lg'
>>> reconcile_classes("px-2 py-1 p-4")
'p-4'
>>> reconcile_classes("hover:bg-red-500 bg-blue-500 hover:bg-green-500")
'bg-blue-500 hover:bg-green-500'
"""

from __future__ import annotations

import re

_SIZES = r"(xs|sm|base|lg|xl|[2-9]xl)"

CLASS_GROUPS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (name, re.compile(pattern))
    for name, pattern in (
        (
            "display",
            r"block|inline-block|inline|flex|inline-flex|grid|inline-grid|hidden"
            r"|table|table-row|table-cell|contents|flow-root|list-item",
        ),
        ("position", r"static|fixed|absolute|relative|sticky"),
        ("visibility", r"visible|invisible|collapse"),
        ("font-size", rf"text-({_SIZES}|\[\d[^\]]*\])(/.+)?"),
        ("text-alignment", r"text-(left|center|right|justify|start|end)"),
        ("text-wrap", r"text-(wrap|nowrap|balance|pretty)"),
        ("text-overflow", r"truncate|text-(ellipsis|clip)"),
        ("text-color", r"text-.+"),
        ("text-decoration", r"underline|overline|line-through|no-underline"),
        ("underline-offset", r"underline-offset-.+"),
        ("decoration-style", r"decoration-(solid|double|dotted|dashed|wavy)"),
        ("decoration-thickness", r"decoration-(auto|from-font|\d+|\[\d[^\]]*\])"),
        ("decoration-color", r"decoration-.+"),
        ("whitespace", r"whitespace-.+"),
        ("break", r"break-(normal|words|all|keep)"),
        ("line-clamp", r"line-clamp-.+"),
        (
            "font-weight",
            r"font-(thin|extralight|light|normal|medium|semibold|bold|extrabold|black)",
        ),
        ("font-family", r"font-.+"),
        ("font-style", r"italic|not-italic"),
        ("text-transform", r"uppercase|lowercase|capitalize|normal-case"),
        ("leading", r"leading-.+"),
        ("tracking", r"tracking-.+"),
        ("bg-attachment", r"bg-(fixed|local|scroll)"),
        (
            "bg-position",
            r"bg-(bottom|center|left|left-bottom|left-top|right|right-bottom"
            r"|right-top|top)",
        ),
        ("bg-repeat", r"bg-(no-repeat|repeat(-x|-y|-round|-space)?)"),
        ("bg-size", r"bg-(auto|cover|contain)"),
        ("bg-image", r"bg-(none|gradient-.+)"),
        ("bg-color", r"bg-.+"),
        ("border-style", r"border-(solid|dashed|dotted|double|hidden|none)"),
        ("border-w", r"border(-\d+|-\[[^\]]+\])?"),
        ("border-w-x", r"border-x(-\d+)?"),
        ("border-w-y", r"border-y(-\d+)?"),
        ("border-w-t", r"border-t(-\d+)?"),
        ("border-w-r", r"border-r(-\d+)?"),
        ("border-w-b", r"border-b(-\d+)?"),
        ("border-w-l", r"border-l(-\d+)?"),
        ("border-color", r"border-.+"),
        ("rounded", rf"rounded(-(none|{_SIZES}|full|\[[^\]]+\]))?"),
        *(
            (f"rounded-{side}", rf"rounded-{side}(-.+)?")
            for side in ("tl", "tr", "br", "bl", "ss", "se", "ee", "es")
        ),
        *(
            (f"rounded-{side}", rf"rounded-{side}(-.+)?")
            for side in ("t", "r", "b", "l", "s", "e")
        ),
        ("shadow", rf"shadow(-({_SIZES}|inner|none))?"),
        ("shadow-color", r"shadow-.+"),
        ("ring-w", r"ring(-\d+|-\[\d[^\]]*\])?"),
        ("ring-inset", r"ring-inset"),
        ("ring-offset-w", r"ring-offset-(\d+|\[\d[^\]]*\])"),
        ("ring-offset-color", r"ring-offset-.+"),
        ("ring-color", r"ring-.+"),
        ("outline-style", r"outline(-solid|-dashed|-dotted|-double|-hidden)?"),
        ("outline-w", r"outline-(none|\d+|\[\d[^\]]*\])"),
        ("outline-offset", r"outline-offset-.+"),
        ("outline-color", r"outline-.+"),
        ("divide-x-reverse", r"divide-x-reverse"),
        ("divide-y-reverse", r"divide-y-reverse"),
        ("divide-x", r"divide-x(-.+)?"),
        ("divide-y", r"divide-y(-.+)?"),
        ("divide-style", r"divide-(solid|dashed|dotted|double|none)"),
        ("divide-color", r"divide-.+"),
        ("opacity", r"opacity-.+"),
        ("z", r"z-.+"),
        ("order", r"order-.+"),
        ("flex-direction", r"flex-(row|row-reverse|col|col-reverse)"),
        ("flex-wrap", r"flex-(wrap|wrap-reverse|nowrap)"),
        ("flex", r"flex-.+"),
        ("grow", r"grow(-.+)?"),
        ("shrink", r"shrink(-.+)?"),
        ("basis", r"basis-.+"),
        ("grid-cols", r"grid-cols-.+"),
        ("grid-rows", r"grid-rows-.+"),
        ("col-span", r"col-(span-.+|auto)"),
        ("row-span", r"row-(span-.+|auto)"),
        ("gap", r"gap-[^xy].*"),
        ("gap-x", r"gap-x-.+"),
        ("gap-y", r"gap-y-.+"),
        ("items", r"items-.+"),
        ("justify-items", r"justify-items-.+"),
        ("justify-self", r"justify-self-.+"),
        ("justify", r"justify-.+"),
        ("content", r"content-.+"),
        ("self", r"self-.+"),
        ("place-items", r"place-items-.+"),
        ("place-content", r"place-content-.+"),
        ("overflow", r"overflow-(auto|hidden|clip|visible|scroll)"),
        ("overflow-x", r"overflow-x-.+"),
        ("overflow-y", r"overflow-y-.+"),
        ("inset", r"inset-[^xy].*"),
        ("inset-x", r"inset-x-.+"),
        ("inset-y", r"inset-y-.+"),
        ("top", r"top-.+"),
        ("right", r"right-.+"),
        ("bottom", r"bottom-.+"),
        ("left", r"left-.+"),
        ("size", r"size-.+"),
        ("min-w", r"min-w-.+"),
        ("max-w", r"max-w-.+"),
        ("min-h", r"min-h-.+"),
        ("max-h", r"max-h-.+"),
        ("w", r"w-.+"),
        ("h", r"h-.+"),
        ("space-x", r"space-x-.+"),
        ("space-y", r"space-y-.+"),
        ("transition", r"transition(-.+)?"),
        ("duration", r"duration-.+"),
        ("ease", r"ease-.+"),
        ("cursor", r"cursor-.+"),
        ("object-fit", r"object-(contain|cover|fill|none|scale-down)"),
        ("object-position", r"object-.+"),
        ("aspect", r"aspect-.+"),
        ("container", r"container"),
        ("sr", r"sr-only|not-sr-only"),
        ("transform", r"transform(-gpu|-cpu|-none)?"),
        ("origin", r"origin-.+"),
        ("scale", r"scale-(?![xy]-).+"),
        ("scale-x", r"scale-x-.+"),
        ("scale-y", r"scale-y-.+"),
        ("rotate", r"rotate-.+"),
        ("translate-x", r"translate-x-.+"),
        ("translate-y", r"translate-y-.+"),
        ("skew-x", r"skew-x-.+"),
        ("skew-y", r"skew-y-.+"),
        ("blur", r"blur(-.+)?"),
        ("brightness", r"brightness-.+"),
        ("contrast", r"contrast-.+"),
        ("drop-shadow", r"drop-shadow(-.+)?"),
        ("grayscale", r"grayscale(-.+)?"),
        ("invert", r"invert(-.+)?"),
        ("saturate", r"saturate-.+"),
        ("sepia", r"sepia(-.+)?"),
        ("backdrop-blur", r"backdrop-blur(-.+)?"),
        ("user-select", r"select-(none|text|all|auto)"),
        ("pointer-events", r"pointer-events-(none|auto)"),
        ("resize", r"resize(-none|-x|-y)?"),
        ("appearance", r"appearance-(none|auto)"),
    )
)

for _prefix in ("p", "m"):
    CLASS_GROUPS += tuple(
        (f"{_prefix}{side}", re.compile(rf"{_prefix}{side}-.+"))
        for side in ("", "x", "y", "s", "e", "t", "r", "b", "l")
    )

CONFLICTING_GROUPS: dict[str, tuple[str, ...]] = {
    "size": ("w", "h"),
    "scale": ("scale-x", "scale-y"),
    "gap": ("gap-x", "gap-y"),
    "overflow": ("overflow-x", "overflow-y"),
    "inset": ("inset-x", "inset-y", "top", "right", "bottom", "left"),
    "inset-x": ("right", "left"),
    "inset-y": ("top", "bottom"),
    "border-w": (
        "border-w-x",
        "border-w-y",
        "border-w-t",
        "border-w-r",
        "border-w-b",
        "border-w-l",
    ),
    "border-w-x": ("border-w-r", "border-w-l"),
    "border-w-y": ("border-w-t", "border-w-b"),
    "rounded": tuple(
        f"rounded-{side}"
        for side in (
            *("t", "r", "b", "l", "s", "e"),
            *("tl", "tr", "br", "bl", "ss", "se", "ee", "es"),
        )
    ),
    "rounded-t": ("rounded-tl", "rounded-tr"),
    "rounded-r": ("rounded-tr", "rounded-br"),
    "rounded-b": ("rounded-br", "rounded-bl"),
    "rounded-l": ("rounded-tl", "rounded-bl"),
    "rounded-s": ("rounded-ss", "rounded-es"),
    "rounded-e": ("rounded-se", "rounded-ee"),
}
for _prefix in ("p", "m"):
    CONFLICTING_GROUPS[_prefix] = tuple(
        f"{_prefix}{side}" for side in ("x", "y", "s", "e", "t", "r", "b", "l")
    )
    CONFLICTING_GROUPS[f"{_prefix}x"] = (f"{_prefix}r", f"{_prefix}l")
    CONFLICTING_GROUPS[f"{_prefix}y"] = (f"{_prefix}t", f"{_prefix}b")


def class_group(utility: str) -> str | None:
    """Return the property group ``utility`` targets, ignoring modifiers.

    >>> class_group("text-sm")
    'font-size'
    >>> class_group("text-red-500")
    'text-color'
    >>> class_group("card-body") is None
    True
    """
    base = utility.removeprefix("-")
    for name, pattern in CLASS_GROUPS:
        if pattern.fullmatch(base):
            return name
    return None


def split_modifiers(token: str) -> tuple[str, bool, str]:
    """Split ``token`` into a normalised variant scope, importance, and base.

    Variants are sorted so ``md:hover:x`` and ``hover:md:x`` share a scope.
    Colons inside arbitrary values (``bg-[url(a:b)]``) are not separators.
    """
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(token):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == ":" and depth == 0:
            parts.append(token[start:index])
            start = index + 1
    base = token[start:]
    important = base.startswith("!") or base.endswith("!")
    base = base.strip("!")
    return ":".join(sorted(parts)), important, base


def reconcile_classes(*parts: str) -> str:
    """Join ``parts`` into one class string with conflicts resolved.

    Parameters
    ----------
    *parts : str
        Whitespace-separated class lists, in application order.

    Returns
    -------
    str
        Surviving classes, in their original relative order.
    """
    tokens = " ".join(part for part in parts if part).split()
    seen: set[tuple[str, str]] = set()
    kept: list[str] = []
    for token in reversed(tokens):
        variants, important, base = split_modifiers(token)
        scope = f"{variants}{'!' if important else ''}"
        group = class_group(base)
        key = (scope, group or f"={base}")
        if key in seen:
            continue
        seen.add(key)
        if group is not None:
            seen.update((scope, other) for other in CONFLICTING_GROUPS.get(group, ()))
        kept.append(token)
    kept.reverse()
    return " ".join(kept)


__all__ = [
    "CLASS_GROUPS",
    "CONFLICTING_GROUPS",
    "class_group",
    "reconcile_classes",
    "split_modifiers",
]
