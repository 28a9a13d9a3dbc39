"""Object literal evaluation.

Turns an object literal node into a plain dict of its primitive-valued
properties. Spread entries, computed keys and properties whose value is not
a primitive literal (identifiers, calls, nested objects, arrays, template
literals, regular expressions) are skipped without error.

Python 3.13+.
"""

from svextract.syntax.ast import Identifier, Literal, ObjectExpression, Property

__all__ = ["evaluate_object", "property_key"]


def property_key(prop: Property) -> str | None:
    """Static key name of a property.

    Returns:
        Identifier name or literal key text; None for computed keys
    """
    if prop.computed:
        return None
    match prop.key:
        case Identifier(name=name):
            return name
        case Literal(value=str() as value):
            return value
        case Literal(value=int() | float() as value) if not isinstance(value, bool):
            return str(value)
        case _:
            return None


def evaluate_object(node: ObjectExpression) -> dict[str, object]:
    """Evaluate the literal-valued properties of an object literal.

    Later duplicate keys overwrite earlier ones.

    Example:
        { id: 'a.b', default: 'Hi', count: 2, values: { n: 1 }, ...rest }
        -> {'id': 'a.b', 'default': 'Hi', 'count': 2}

    Args:
        node: Object literal

    Returns:
        Mapping of key -> primitive value
    """
    result: dict[str, object] = {}
    for prop in node.properties:
        if not isinstance(prop, Property) or not isinstance(prop.value, Literal):
            continue
        key = property_key(prop)
        if key is not None:
            result[key] = prop.value.value
    return result
