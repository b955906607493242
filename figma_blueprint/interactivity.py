from typing import Optional

from .blueprint import ClickHandler, FlowConnection, Interactivity, PrototypeFlow, ReactionValue, TransitionValue
from .scene import NodeKind, Reaction, SceneNode

DEFAULT_TRANSITION = "fade"
DEFAULT_DURATION = 200
DEFAULT_EASING = "ease"


def _action_params(reaction: Reaction) -> dict:
    params = {
        "type": reaction.action_type,
        "destination": reaction.destination,
        "navigation": reaction.navigation,
        "transition": reaction.transition_type,
        "duration": reaction.duration,
        "easing": reaction.easing,
        "preserveScrollPosition": reaction.preserve_scroll_position,
    }
    return {k: v for k, v in params.items() if v is not None}


def click_handler(reaction: Reaction) -> ClickHandler:
    return ClickHandler(
        type="navigate" if reaction.trigger_type == "ON_CLICK" else "custom",
        target=reaction.destination,
        parameters=_action_params(reaction),
    )


def transition(reaction: Reaction) -> TransitionValue:
    return TransitionValue(
        type=reaction.transition_type or DEFAULT_TRANSITION,
        duration=reaction.duration or DEFAULT_DURATION,
        easing=reaction.easing or DEFAULT_EASING,
    )


def prototype_flow(node: SceneNode) -> PrototypeFlow:
    screens = []
    for reaction in node.reactions:
        if reaction.destination and reaction.destination not in screens:
            screens.append(reaction.destination)
    return PrototypeFlow(
        start_node=node.id,
        end_node=node.reactions[0].destination or "",
        connections=[
            FlowConnection(
                from_=node.id,
                to=r.destination or "",
                trigger=r.trigger_type,
                action=r.action_type,
                transition=r.transition_type,
                duration=r.duration,
            )
            for r in node.reactions
        ],
        screens=screens,
    )


def _states(node: SceneNode):
    states = {}
    on_click = on_press = None
    for reaction in node.reactions:
        if reaction.trigger_type == "ON_HOVER":
            states["hover"] = {"transition": "background-color 0.2s ease-in-out"}
        elif reaction.trigger_type == "ON_CLICK":
            on_click = "navigate"
        elif reaction.trigger_type == "ON_PRESS":
            on_press = "navigate"

    if node.kind is NodeKind.INSTANCE and node.component is not None:
        for key, prop in node.component.component_properties.items():
            lowered = key.lower()
            if "state" in lowered or "variant" in lowered:
                states[str(prop.value)] = {}
    return states or None, on_click, on_press


def extract_interactivity(node: SceneNode) -> Optional[Interactivity]:
    prototype_ids = (
        node.prototype_start_node_id,
        node.transition_node_id,
        node.transition_duration,
        node.transition_easing,
    )
    if not node.reactions and all(v is None for v in prototype_ids):
        return None

    states, on_click, on_press = _states(node)
    fields = {
        "states": states,
        "on_click": on_click,
        "on_press": on_press,
        "prototype_start_node_id": node.prototype_start_node_id,
        "transition_node_id": node.transition_node_id,
        "transition_duration": node.transition_duration,
        "transition_easing": node.transition_easing,
    }

    if node.reactions:
        # aggregates come from the first reaction only
        first = node.reactions[0]
        fields.update(
            reactions=[
                ReactionValue(
                    trigger=r.trigger_type,
                    key_code=r.key_code,
                    device=r.device,
                    action=r.action_type,
                    destination=r.destination,
                    navigation=r.navigation,
                    transition=r.transition_type,
                    duration=r.duration,
                    easing=r.easing,
                    preserve_scroll_position=r.preserve_scroll_position,
                )
                for r in node.reactions
            ],
            on_click_handlers=[click_handler(r) for r in node.reactions],
            transitions=[transition(r) for r in node.reactions],
            animation_type=first.transition_type or DEFAULT_TRANSITION,
            easing=first.easing or DEFAULT_EASING,
            timing=first.duration or DEFAULT_DURATION,
            prototype_flow=prototype_flow(node),
            linked_screens=[r.destination for r in node.reactions if r.destination],
        )
    return Interactivity(**fields)
