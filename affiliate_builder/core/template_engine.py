"""
Moteur de template statique — substitution minimale à 3 constructions.

  §^key§ ... §/key§   → inclus seulement si data[key] est falsy
  §#key§ ... §/key§   → liste : répété par item ; valeur truthy : inclus une fois
  §key§               → str(data[key]) pour toute clé scalaire de premier niveau

Ordre d'évaluation : sections niées, puis sections/boucles, puis variables.
Les balises sont supposées bien formées (aucune validation).
"""
import re
from typing import Any, Mapping

ITEM_PLACEHOLDER = "§.§"

_NEGATED  = re.compile(r"§\^([\w-]+)§(.*?)§/\1§", re.S)
_SECTION  = re.compile(r"§#([\w-]+)§(.*?)§/\1§", re.S)
_VARIABLE = re.compile(r"§([\w-]+)§")


def is_falsy(value: Any) -> bool:
    """Absent, None, False, "", 0 et conteneur vide sont falsy."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def substitute_variables(template: str, data: Mapping[str, Any]) -> str:
    """Remplace §key§ par les valeurs scalaires ; les placeholders inconnus restent intacts."""
    def replacer(match):
        key = match.group(1)
        value = data.get(key)
        if key in data and _is_scalar(value):
            return _to_text(value)
        return match.group(0)

    return _VARIABLE.sub(replacer, template)


def _render_item(content: str, item: Any, data: Mapping[str, Any]) -> str:
    if isinstance(item, Mapping):
        return render_template(content, {**data, **item})
    if _is_scalar(item):
        return render_template(content.replace(ITEM_PLACEHOLDER, _to_text(item)), data)
    return render_template(content, data)


def render_template(template: str, data: Mapping[str, Any]) -> str:
    """Rend `template` contre le sac de données plat `data`."""
    if not template:
        return ""

    def negated(match):
        key, content = match.group(1), match.group(2)
        if is_falsy(data.get(key)):
            return render_template(content, data)
        return ""

    def section(match):
        key, content = match.group(1), match.group(2)
        value = data.get(key)
        if is_falsy(value):
            return ""
        if isinstance(value, (list, tuple)):
            return "".join(_render_item(content, item, data) for item in value)
        return render_template(content, data)

    out = _NEGATED.sub(negated, template)
    out = _SECTION.sub(section, out)
    return substitute_variables(out, data)
