"""Regex heuristics over the student's React source text.

Every detector is a pure function of the text it is given and accepts the
common spellings of the same idea: `.jsx` or `.js` imports, function or arrow
components, `props.x` or destructured props, `id`/`studentId` and
`department`/`dept`. None of them parse JavaScript.
"""

import re
from typing import Dict, List, Pattern

COMPONENT_NAME = "StudentCard"

# Prop name variants accepted for each displayed field
NAME_PROPS = ("name",)
ID_PROPS = ("id", "studentId")
DEPT_PROPS = ("department", "dept")
ALL_PROPS = NAME_PROPS + ID_PROPS + DEPT_PROPS

_IDENT = r"[A-Za-z_$][\w$]*"

_COMPONENT_DECL: List[Pattern[str]] = [
    re.compile(rf"\bfunction\s+{_IDENT}\s*\("),
    re.compile(rf"\bconst\s+{_IDENT}\s*=\s*\("),
    re.compile(rf"\bconst\s+{_IDENT}\s*=\s*.*=>"),
    re.compile(rf"\bclass\s+{_IDENT}\s+extends\s+(?:React\.)?(?:Pure)?Component\b"),
]
_NAMED_COMPONENT_DECL: List[Pattern[str]] = [
    re.compile(rf"\bfunction\s+{COMPONENT_NAME}\s*\("),
    re.compile(rf"\b(?:const|let|var)\s+{COMPONENT_NAME}\s*=\s*\("),
    re.compile(rf"\b(?:const|let|var)\s+{COMPONENT_NAME}\s*=\s*.*=>"),
    re.compile(rf"\bclass\s+{COMPONENT_NAME}\s+extends\b"),
]
_JSX_RETURN: List[Pattern[str]] = [
    re.compile(r"return\s*\(?\s*<[^>]", re.DOTALL),
    re.compile(r"=>\s*\(?\s*<[^>]", re.DOTALL),
]
_EXPORT = re.compile(r"\bexport\s+default\b|\bexport\s+\{[^}]*\}|\bexport\s+(?:const|function|class)\b")
_COMMENT = re.compile(r"//|/\*|\*/|\{\s*/\*")

_LABELS: Dict[str, Pattern[str]] = {
    "name": re.compile(r"<\w+[^>]*>\s*Name\b", re.IGNORECASE),
    "id": re.compile(r"<\w+[^>]*>\s*(?:ID|Student\s*ID)\b", re.IGNORECASE),
    "department": re.compile(r"<\w+[^>]*>\s*(?:Department|Dept)\b", re.IGNORECASE),
}

_IMPORT = re.compile(
    rf"import\s+(?:{COMPONENT_NAME}|\{{\s*{COMPONENT_NAME}\s*\}})\s+from\s+"
    rf"['\"][^'\"]*components/{COMPONENT_NAME}(?:\.jsx?)?['\"]"
)
_RENDER = re.compile(rf"<{COMPONENT_NAME}\b")

_PROP_PARAM: List[Pattern[str]] = [
    re.compile(rf"\bfunction\s+{_IDENT}\s*\(\s*props\s*\)"),
    re.compile(rf"\b(?:const|let|var)\s+{_IDENT}\s*=\s*\(?\s*props\s*\)?\s*=>"),
    re.compile(
        r"\(\s*\{\s*(?:%s)(?:\s*,\s*(?:%s))*\s*,?\s*\}\s*\)" % ("|".join(ALL_PROPS), "|".join(ALL_PROPS))
    ),
]


def _prop_used(text: str, variants) -> bool:
    """True if any variant appears as `props.x` or as a `{x}` JSX expression."""
    alternatives = "|".join(variants)
    return bool(
        re.search(rf"\bprops\.(?:{alternatives})\b", text)
        or re.search(rf"\{{\s*(?:{alternatives})\s*\}}", text)
    )


def declares_component(text: str) -> bool:
    """Any function, arrow function or class component declaration, whatever its name."""
    return any(p.search(text) for p in _COMPONENT_DECL) if text else False


def declares_named_component(text: str) -> bool:
    return any(p.search(text) for p in _NAMED_COMPONENT_DECL) if text else False


def returns_jsx(text: str) -> bool:
    return any(p.search(text) for p in _JSX_RETURN) if text else False


def has_export(text: str) -> bool:
    return bool(text and _EXPORT.search(text))


def has_comment(text: str) -> bool:
    return bool(text and _COMMENT.search(text))


def has_label(text: str, field: str) -> bool:
    """Whether a tag's text starts with the label for `field` (name, id or department)."""
    return bool(text and _LABELS[field].search(text))


def imports_component(text: str) -> bool:
    return bool(text and _IMPORT.search(text))


def count_renders(text: str) -> int:
    return len(_RENDER.findall(text)) if text else 0


def uses_props_in_jsx(text: str) -> bool:
    """At least one of the expected props is rendered, via `{props.x}` or `{x}`."""
    if not text:
        return False
    alternatives = "|".join(ALL_PROPS)
    return bool(
        re.search(rf"\{{\s*props\.(?:{alternatives})\s*\}}", text)
        or re.search(rf"\{{\s*(?:{alternatives})\s*\}}", text)
    )


def accepts_props(text: str) -> bool:
    """The component takes `props` or destructures the expected fields."""
    return any(p.search(text) for p in _PROP_PARAM) if text else False


def uses_all_props(text: str) -> bool:
    """Name, id (or studentId) and department (or dept) are all used."""
    if not text:
        return False
    return all(_prop_used(text, variants) for variants in (NAME_PROPS, ID_PROPS, DEPT_PROPS))


def has_reasonable_prop_names(text: str) -> bool:
    if not text:
        return False
    return all(
        re.search(rf"\b(?:{'|'.join(variants)})\b", text)
        for variants in (NAME_PROPS, ID_PROPS, DEPT_PROPS)
    )


def extract_prop_values(text: str, variants) -> List[str]:
    """Literal values passed to each `<StudentCard>` for the given prop.

    Accepts `name="Ada"`, `name='Ada'`, `` name=`Ada` `` and `name={"Ada"}`.
    """
    if not text:
        return []
    pattern = re.compile(
        rf"<{COMPONENT_NAME}[^>]*\s(?:{'|'.join(variants)})\s*=\s*\{{?\s*[\"'`]([^\"'`]+)[\"'`]"
    )
    return pattern.findall(text)


def has_distinct_values(values: List[str]) -> bool:
    return len(values) >= 2 and len(set(values)) >= 2


def instances_differ(app_text: str) -> bool:
    """Two or more rendered cards carry different names or different ids."""
    return (
        has_distinct_values(extract_prop_values(app_text, NAME_PROPS))
        or has_distinct_values(extract_prop_values(app_text, ID_PROPS))
    )


def detect_signals(app_text: str, card_text: str) -> Dict[int, Dict[str, bool]]:
    """Raw detection notes per task, recorded in each task block of grade.json."""
    renders = count_renders(app_text)
    return {
        1: {
            "importStudentCard": imports_component(app_text),
            "rendersStudentCard": renders >= 1,
            "hasNameLabel": has_label(card_text, "name"),
            "hasIdLabel": has_label(card_text, "id"),
            "hasDeptLabel": has_label(card_text, "department"),
        },
        2: {
            "acceptsProps": accepts_props(card_text),
            "usesPropsInJSX": uses_props_in_jsx(card_text),
            "hasTwoInstances": renders >= 2,
            "twoDifferentNames": has_distinct_values(extract_prop_values(app_text, NAME_PROPS)),
            "twoDifferentIds": has_distinct_values(extract_prop_values(app_text, ID_PROPS)),
        },
    }
