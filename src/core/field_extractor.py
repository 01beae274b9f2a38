"""Lectura estrecha de respuestas de la API.

Por qué no exponer un parser JSON general:
- El resto del Core solo necesita tres formas de respuesta (campo string,
  flag booleano y array plano de objetos); una interfaz mínima mantiene
  estables las expectativas de los tests y de los servicios.
- Internamente se usa `json` y, si el body no es JSON válido, un escaneo
  textual de compatibilidad.

Limitación conocida: aplicar solo a respuestas cuya forma está garantizada
por la plataforma. Estructuras inesperadas devuelven vacío/None sin error.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator

_MISSING = object()

_FLAT_OBJECT_RE = re.compile(r"\{[^{}\[\]]*\}")


def _load(body: str) -> Any:
    try:
        return json.loads(body)
    except (TypeError, ValueError):
        return _MISSING


def _walk(node: Any) -> Iterator[Any]:
    """Recorre el documento en orden (pre-order), incluyendo el propio nodo."""

    yield node
    if isinstance(node, dict):
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk(item)


def _string_field_re(key: str) -> re.Pattern[str]:
    return re.compile(r'"' + re.escape(key) + r'"\s*:\s*"([^"]*)"')


def _find_string(node: Any, key: str) -> str | None:
    """Primer string bajo `key` en orden de documento (cada valor se explora antes que sus hermanos)."""

    if isinstance(node, dict):
        for name, value in node.items():
            if name == key and isinstance(value, str):
                return value
            found = _find_string(value, key)
            if found is not None:
                return found
    elif isinstance(node, list):
        for item in node:
            found = _find_string(item, key)
            if found is not None:
                return found
    return None


def get_string_field(body: str, key: str) -> str | None:
    """Primer valor string asociado a `key` (orden de documento) o None.

    Valores no-string (números, null, objetos) se ignoran.
    """

    data = _load(body)
    if data is _MISSING:
        match = _string_field_re(key).search(body or "")
        return match.group(1) if match else None
    return _find_string(data, key)


def flag_is_true(body: str, key: str = "success") -> bool:
    """True si aparece el token literal `"<key>": true` (espacios libres alrededor de `:`)."""

    pattern = re.compile(r'"' + re.escape(key) + r'"\s*:\s*true')
    return bool(pattern.search(body or ""))


def get_pairs(body: str, key1: str, key2: str) -> list[tuple[str, str]]:
    """Pares `(obj[key1], obj[key2])` de los objetos dentro de arrays, en orden.

    Solo se incluyen objetos donde ambos valores son strings.
    """

    data = _load(body)
    if data is _MISSING:
        return _scan_pairs(body or "", key1, key2)

    pairs: list[tuple[str, str]] = []
    for node in _walk(data):
        if not isinstance(node, list):
            continue
        for item in node:
            if not isinstance(item, dict):
                continue
            first, second = item.get(key1), item.get(key2)
            if isinstance(first, str) and isinstance(second, str):
                pairs.append((first, second))
    return pairs


def _scan_pairs(text: str, key1: str, key2: str) -> list[tuple[str, str]]:
    first_re, second_re = _string_field_re(key1), _string_field_re(key2)
    pairs: list[tuple[str, str]] = []
    for obj in _FLAT_OBJECT_RE.finditer(text):
        chunk = obj.group(0)
        first, second = first_re.search(chunk), second_re.search(chunk)
        if first and second:
            pairs.append((first.group(1), second.group(1)))
    return pairs
