from typing import List, Optional

from .blueprint import ComponentRef, InstanceOverride, Relationships, StyleReference, VariantProperty
from .scene import NodeKind, SceneNode
from .snapshot import HostSnapshot

OVERRIDE_TYPES = (
    (("text", "characters"), "text"),
    (("fill",), "fill"),
    (("stroke",), "stroke"),
    (("effect",), "effect"),
    (("visible",), "visible"),
)

STYLE_ROLE_TYPES = {"fill": "paint", "stroke": "paint", "text": "text", "effect": "effect"}


def infer_override_type(key: str) -> str:
    lowered = key.lower()
    for needles, override_type in OVERRIDE_TYPES:
        if any(n in lowered for n in needles):
            return override_type
    return "component"


def parse_variant_axes(component_set: SceneNode) -> List[VariantProperty]:
    """Variant axes from child component names such as ``"Button, State=Hover"``."""
    axes = {}
    for child in component_set.children:
        if child.kind is not NodeKind.COMPONENT:
            continue
        for part in child.name.split(", "):
            if "=" not in part:
                continue
            pieces = part.split("=")
            name, value = pieces[0].strip(), pieces[1].strip()
            options = axes.setdefault(name, [])
            if value not in options:
                options.append(value)
    return [
        VariantProperty(name=name, value=options[0], default_value=options[0], options=options)
        for name, options in axes.items()
    ]


def instance_overrides(node: SceneNode) -> List[InstanceOverride]:
    props = node.component.component_properties if node.component else {}
    return [
        InstanceOverride(
            property=key,
            value=prop.value,
            original_value=prop.default_value,
            override_type=infer_override_type(key),
            path=key.split("/"),
        )
        for key, prop in props.items()
    ]


def instance_variant_properties(node: SceneNode) -> List[VariantProperty]:
    props = node.component.component_properties if node.component else {}
    return [
        VariantProperty(
            name=key,
            value=prop.value,
            type=prop.type or "variant",
            default_value=prop.default_value if prop.default_value is not None else prop.value,
            options=list(prop.preferred_values) if prop.preferred_values else None,
        )
        for key, prop in props.items()
    ]


def style_references(node: SceneNode, snapshot: HostSnapshot) -> List[StyleReference]:
    return [
        StyleReference(id=style_id, name=snapshot.style_name(style_id) or "Unknown Style", type=STYLE_ROLE_TYPES[role])
        for role, style_id in node.style_ids.items()
    ]


def _component_ref(child: SceneNode) -> ComponentRef:
    component = child.component
    return ComponentRef(
        id=child.id,
        name=child.name,
        type=child.type_name,
        key=(component.key if component else None) or "",
        description=(component.description if component else None) or "",
    )


def extract_relationships(
    node: SceneNode, snapshot: HostSnapshot, parent: Optional[SceneNode] = None
) -> Relationships:
    fields = {"style_references": style_references(node, snapshot)}

    if node.kind is NodeKind.INSTANCE:
        main = snapshot.main_component(node.id)
        if main is not None:
            fields.update(
                main_component=ComponentRef(
                    id=main.id, name=main.name, type=main.type, key=main.key or "", description=main.description or ""
                ),
                variant=main.name,
                description=main.description or None,
            )
        # lookup failures fall back to the instance's own name
        fields["component_reference"] = main.name if main is not None else node.name
        fields["instance_overrides"] = instance_overrides(node)
        fields["variant_properties"] = instance_variant_properties(node)

    elif node.kind is NodeKind.COMPONENT_SET:
        fields["description"] = node.component.description if node.component else None
        fields["variant"] = "component-set"
        components = [c for c in node.children if c.kind is NodeKind.COMPONENT]
        if components:
            fields["variant_properties"] = parse_variant_axes(node)
            fields["variant_states"] = [c.name for c in components]
            fields["child_components"] = [_component_ref(c) for c in components]

    elif node.kind is NodeKind.COMPONENT:
        fields["component_reference"] = node.name
        fields["description"] = node.component.description if node.component else None
        if parent is not None and parent.kind is NodeKind.COMPONENT_SET:
            fields["variant"] = "variant"
            fields["variant_states"] = [node.name]

    return Relationships(**fields)
