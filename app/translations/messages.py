"""
Conversion between translation rows and the nested message files.

A message file is a JSON object per locale. Objects at the top level are
namespaces; scalars at the top level belong to the default namespace. Inside
a namespace, nested objects become dotted keys.
"""

from .models import DEFAULT_NAMESPACE


def _stringify(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_messages(messages, namespace=DEFAULT_NAMESPACE, prefix=""):
    """Yield ``(namespace, key, value)`` for every leaf of a message tree"""
    for name, value in messages.items():
        full_key = f"{prefix}.{name}" if prefix else name
        if isinstance(value, dict):
            if not prefix:
                yield from flatten_messages(value, namespace=name)
            else:
                yield from flatten_messages(value, namespace=namespace, prefix=full_key)
        elif value is not None:
            yield namespace, full_key, _stringify(value)


def nest_messages(rows):
    """Build a message tree from ``(namespace, key, value)`` triples

    The default namespace is merged into the root, every other namespace
    becomes a top-level object.
    """
    namespaces = {}
    for namespace, key, value in rows:
        current = namespaces.setdefault(namespace, {})
        *parents, leaf = key.split(".")
        for part in parents:
            child = current.get(part)
            if not isinstance(child, dict):
                child = current[part] = {}
            current = child
        current[leaf] = value

    merged = {}
    for namespace, content in namespaces.items():
        if namespace == DEFAULT_NAMESPACE:
            merged.update(content)
        else:
            merged[namespace] = content
    return merged
