"""Blueprint output models.

Every value group is an immutable pydantic model serialized with camelCase
keys; ``BlueprintNode.to_dict()`` produces the JSON-ready tree.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BlueprintModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- visuals --------------------------------------------------------------

class GradientStopValue(BlueprintModel):
    position: float
    color: str


class PaintValue(BlueprintModel):
    type: str
    visible: bool = True
    opacity: Optional[float] = None
    blend_mode: Optional[str] = None
    color: Optional[str] = None
    fallback_color: Optional[str] = None
    token: Optional[str] = None
    gradient_stops: Optional[List[GradientStopValue]] = None
    gradient_transform: Optional[List[List[float]]] = None
    gradient_handle_positions: Optional[List[List[float]]] = None
    gradient_css: Optional[str] = None
    image_hash: Optional[str] = None
    video_hash: Optional[str] = None
    scale_mode: Optional[str] = None
    image_transform: Optional[List[List[float]]] = None
    filters: Optional[Dict[str, float]] = None


class CornerRadii(BlueprintModel):
    top_left: float
    top_right: float
    bottom_right: float
    bottom_left: float


class EffectValue(BlueprintModel):
    type: str
    visible: bool = True
    blend_mode: Optional[str] = None
    radius: Optional[float] = None
    color: Optional[str] = None
    offset: Optional[List[float]] = None
    spread: Optional[float] = None


class Visuals(BlueprintModel):
    fills: Optional[List[PaintValue]] = None
    strokes: Optional[List[PaintValue]] = None
    border_radius: Optional[Union[float, CornerRadii]] = Field(
        None, description="Uniform radius, or one value per corner"
    )
    corner_smoothing: Optional[float] = None
    stroke_weight: Optional[float] = None
    stroke_align: Optional[str] = None
    stroke_cap: Optional[str] = None
    stroke_join: Optional[str] = None
    dash_pattern: Optional[List[float]] = None
    opacity: Optional[float] = None
    blend_mode: Optional[str] = None
    is_mask: Optional[bool] = None
    fill_style_id: Optional[str] = None
    stroke_style_id: Optional[str] = None
    effect_style_id: Optional[str] = None
    effects: Optional[List[EffectValue]] = None
    backdrop_blur: Optional[float] = None
    clip_path: Optional[str] = None


# --- typography -----------------------------------------------------------

class UnitValue(BlueprintModel):
    value: Optional[float] = None
    unit: str


class FontFallback(BlueprintModel):
    family: Optional[str] = None
    size: str
    weight: int
    style: Optional[str] = None
    line_height: str
    letter_spacing: str


class FontDescriptor(BlueprintModel):
    family: Optional[str] = None
    size: Optional[float] = None
    weight: int = 400
    style: Optional[str] = None
    line_height: Optional[UnitValue] = None
    letter_spacing: Optional[UnitValue] = None
    token: Optional[str] = None
    fallback: FontFallback


class TextAlignment(BlueprintModel):
    horizontal: str = "LEFT"
    vertical: Optional[str] = None


class FontDefinition(BlueprintModel):
    family: str
    weight: int = 400
    style: str = "normal"
    feature_settings: Dict[str, bool] = Field(default_factory=dict)


class FontStack(BlueprintModel):
    primary: FontDefinition
    fallbacks: List[FontDefinition]
    system_fallback: str


class TextMetrics(BlueprintModel):
    width: float
    actual_bounding_box_ascent: float
    actual_bounding_box_descent: float
    actual_bounding_box_left: float = 0.0
    actual_bounding_box_right: float
    font_bounding_box_ascent: float
    font_bounding_box_descent: float
    em_height_ascent: float
    em_height_descent: float


class LineBox(BlueprintModel):
    text: str
    y: float
    height: float
    baseline: float
    ascent: float
    descent: float
    leading: float
    width: float
    text_align: str


class CharacterMetric(BlueprintModel):
    char: str
    x: float
    y: float = 0.0
    width: float
    height: float
    advance_width: float


class TextShadow(BlueprintModel):
    offset_x: float
    offset_y: float
    blur_radius: float
    color: str


class TextStroke(BlueprintModel):
    width: float
    color: str


class Typography(BlueprintModel):
    font: Optional[FontDescriptor] = None
    text_style_id: Optional[str] = None
    text_content: Optional[str] = None
    text_color: Optional[str] = None
    text_color_token: Optional[str] = None
    text_color_fallback: Optional[str] = None
    text_case: Optional[str] = None
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None
    text_auto_resize: Optional[str] = None
    text_truncation: Optional[str] = None
    alignment: Optional[TextAlignment] = None
    paragraph_spacing: Optional[float] = None
    paragraph_indent: Optional[float] = None
    list_spacing: Optional[float] = None
    line_indent: Optional[float] = None
    open_type_features: Optional[Dict[str, bool]] = None
    font_stack: Optional[FontStack] = None
    text_metrics: Optional[TextMetrics] = None
    line_boxes: Optional[List[LineBox]] = None
    character_metrics: Optional[List[CharacterMetric]] = None
    first_line_offset: Optional[float] = None
    last_line_offset: Optional[float] = None
    text_shadow: Optional[List[TextShadow]] = None
    text_stroke: Optional[TextStroke] = None
    font_loading_state: Optional[str] = None


# --- layout ---------------------------------------------------------------

class Padding(BlueprintModel):
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


class ConstraintsValue(BlueprintModel):
    horizontal: str = "MIN"
    vertical: str = "MIN"
    scale_mode: Optional[str] = None


class AutoLayout(BlueprintModel):
    enabled: bool
    direction: str
    spacing: float = 0
    alignment: str
    padding: Padding = Field(default_factory=Padding)
    align_items: str
    justify_content: str
    gap: float = 0
    primary_axis_sizing_mode: Optional[str] = None
    counter_axis_sizing_mode: Optional[str] = None
    layout_wrap: Optional[str] = None
    detected_direction: Optional[str] = None
    suggested_alignment: Optional[str] = None


class SizeMode(BlueprintModel):
    width: str = "FIXED"
    height: str = "FIXED"


class ResponsiveHints(BlueprintModel):
    preferred_behavior: str
    breakpoint_support: bool
    fluid_sizing: bool
    adaptive_layout: bool


class Size(BlueprintModel):
    width: Optional[float] = None
    height: Optional[float] = None


class Position(BlueprintModel):
    x: float = 0
    y: float = 0
    rotation: float = 0
    z_index: Optional[int] = None


class RelativePosition(BlueprintModel):
    x: float
    y: float
    x_percent: float
    y_percent: float


class Layout(BlueprintModel):
    constraints: ConstraintsValue = Field(default_factory=ConstraintsValue)
    auto_layout: Optional[AutoLayout] = None
    padding: Optional[Padding] = None
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    size_mode: SizeMode = Field(default_factory=SizeMode)
    responsive_hints: Optional[ResponsiveHints] = None
    layout_align: Optional[str] = None
    layout_grow: Optional[float] = None
    layout_positioning: Optional[str] = None
    gap: Optional[float] = None
    clip_content: bool = False
    size: Optional[Size] = None
    position: Optional[Position] = None
    relative_to_parent: Optional[RelativePosition] = None


# --- geometry -------------------------------------------------------------

class PixelBounds(BlueprintModel):
    left: int
    top: int
    right: int
    bottom: int


class BoundingBox(BlueprintModel):
    x: float
    y: float
    width: float
    height: float
    left: float
    top: float
    right: float
    bottom: float
    center_x: float
    center_y: float
    pixel_bounds: PixelBounds


class TransformDecomposition(BlueprintModel):
    translate_x: float
    translate_y: float
    scale_x: float
    scale_y: float
    rotation: float
    skew_x: float
    skew_y: float


class PathCommand(BlueprintModel):
    command: str
    coordinates: List[float] = Field(default_factory=list)
    relative: bool = False


class VectorPathValue(BlueprintModel):
    winding_rule: Optional[str] = None
    data: str


class SvgPath(BlueprintModel):
    d: str
    fill_rule: str
    fill: Optional[str] = None
    opacity: Optional[float] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    stroke_linecap: Optional[str] = None
    stroke_linejoin: Optional[str] = None


class SvgData(BlueprintModel):
    view_box: str
    width: float
    height: float
    svg_content: str
    paths: List[SvgPath] = Field(default_factory=list)
    preserve_aspect_ratio: str = "xMidYMid meet"


class MaskData(BlueprintModel):
    type: str = "outline"
    opacity: float = 1.0
    inverted: bool = False


class Geometry(BlueprintModel):
    bounding_box: Optional[BoundingBox] = None
    absolute_transform: Optional[List[List[float]]] = None
    relative_transform: Optional[List[List[float]]] = None
    transform: Optional[TransformDecomposition] = None
    vector_paths: Optional[List[VectorPathValue]] = None
    vector_network: Optional[Dict[str, Any]] = None
    winding_rule: Optional[str] = None
    handle_mirroring: Optional[str] = None
    path_commands: Optional[List[PathCommand]] = None
    svg_data: Optional[SvgData] = None
    mask_data: Optional[MaskData] = None
    clip_path: Optional[str] = None


# --- semantic -------------------------------------------------------------

class GroupMetadata(BlueprintModel):
    type: str
    purpose: str
    role: str = "group"
    is_container: bool = True
    is_interactive: bool
    children_count: int
    layout_type: str
    responsive_behavior: str


class Semantic(BlueprintModel):
    clean_name: str
    normalized_name: str
    section_type: Optional[str] = None
    purpose: Optional[str] = None
    role: Optional[str] = None
    component_type: Optional[str] = None
    is_interactive: bool = False
    is_reusable: bool = False
    is_responsive: bool = False
    is_container: bool = False
    has_interactions: bool = False
    has_hover_state: bool = False
    has_click_handler: bool = False
    theme: str = "neutral"
    importance: str = "low"
    suggested_component_type: Optional[str] = None
    design_intent: Optional[str] = None
    group_metadata: Optional[GroupMetadata] = None


# --- responsive -----------------------------------------------------------

class Dimensions(BlueprintModel):
    width: Optional[float] = None
    height: Optional[float] = None


class ViewportAdaptation(BlueprintModel):
    type: str = "scale"
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    preserve_aspect_ratio: bool = True
    maintain_proportions: bool = True


class LayoutChanges(BlueprintModel):
    direction: str
    alignment: Optional[str] = None
    spacing: Optional[float] = None
    padding: Padding
    sizing: Optional[str] = None
    constraints: Optional[ConstraintsValue] = None
    position: Optional[str] = None
    display: str = "flex"


class BreakpointBehavior(BlueprintModel):
    breakpoint: str
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    layout_changes: LayoutChanges


class ContainerBreakpoint(BlueprintModel):
    width: Optional[float] = None
    layout: str
    spacing: Optional[float] = None
    padding: Padding
    children_layout: str


class ContainerAdaptation(BlueprintModel):
    type: str = "responsive"
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    aspect_ratio: Optional[float] = None
    breakpoints: Dict[str, ContainerBreakpoint]
    content_behavior: str = "scale"


class ResizeConstraint(BlueprintModel):
    axis: str
    type: str = "min"
    value: float
    unit: str = "px"


class ResizingLogic(BlueprintModel):
    type: str = "responsive"
    constraints: List[ResizeConstraint]
    behavior: str = "maintain-aspect"
    min_size: Dimensions
    max_size: Dimensions
    preferred_size: Dimensions


class Responsive(BlueprintModel):
    adaptive_layout: bool = True
    fluid_sizing: bool
    container_queries: bool = False
    aspect_ratio: Optional[float] = None
    viewport_adaptation: ViewportAdaptation
    breakpoint_behavior: List[BreakpointBehavior]
    container_adaptation: ContainerAdaptation
    resizing_logic: ResizingLogic


# --- interactivity --------------------------------------------------------

class ReactionValue(BlueprintModel):
    trigger: Optional[str] = None
    key_code: Optional[int] = None
    device: Optional[str] = None
    action: Optional[str] = None
    destination: Optional[str] = None
    navigation: Optional[str] = None
    transition: Optional[str] = None
    duration: Optional[float] = None
    easing: Optional[str] = None
    preserve_scroll_position: Optional[bool] = None


class ClickHandler(BlueprintModel):
    type: str
    target: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class TransitionValue(BlueprintModel):
    type: str = "fade"
    duration: float = 200
    easing: str = "ease"
    direction: str = "in"


class FlowConnection(BlueprintModel):
    from_: str = Field(..., alias="from")
    to: str
    trigger: Optional[str] = None
    action: Optional[str] = None
    transition: Optional[str] = None
    duration: Optional[float] = None


class PrototypeFlow(BlueprintModel):
    start_node: str
    end_node: str
    connections: List[FlowConnection]
    screens: List[str]
    navigation: str = "linear"


class Interactivity(BlueprintModel):
    reactions: List[ReactionValue] = Field(default_factory=list)
    on_click_handlers: List[ClickHandler] = Field(default_factory=list)
    transitions: List[TransitionValue] = Field(default_factory=list)
    animation_type: Optional[str] = None
    easing: Optional[str] = None
    timing: Optional[float] = None
    prototype_flow: Optional[PrototypeFlow] = None
    linked_screens: Optional[List[str]] = None
    states: Optional[Dict[str, Dict[str, Any]]] = None
    on_click: Optional[str] = None
    on_press: Optional[str] = None
    prototype_start_node_id: Optional[str] = None
    transition_node_id: Optional[str] = None
    transition_duration: Optional[float] = None
    transition_easing: Optional[str] = None


# --- tokens ---------------------------------------------------------------

class LintWarning(BlueprintModel):
    level: str = "warning"
    category: str = "token"
    message: str
    element: str
    property: str
    rule: str = "token-required"
    fixable: bool = False


class Tokens(BlueprintModel):
    token_mapping: Dict[str, str] = Field(default_factory=dict)
    design_tokens: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    fallback_values: Dict[str, str] = Field(default_factory=dict)
    non_token_values: List[str] = Field(default_factory=list)
    linting_warnings: List[LintWarning] = Field(default_factory=list)


# --- relationships --------------------------------------------------------

class ComponentRef(BlueprintModel):
    id: str
    name: str
    type: Optional[str] = None
    key: str = ""
    description: str = ""


class InstanceOverride(BlueprintModel):
    property: str
    value: Any = None
    original_value: Any = None
    override_type: str
    path: List[str]


class VariantProperty(BlueprintModel):
    name: str
    value: Any = None
    type: str = "variant"
    default_value: Any = None
    options: Optional[List[Any]] = None


class StyleReference(BlueprintModel):
    id: str
    name: str
    type: str


class Relationships(BlueprintModel):
    main_component: Optional[ComponentRef] = None
    component_reference: Optional[str] = None
    variant: Optional[str] = None
    description: Optional[str] = None
    instance_overrides: List[InstanceOverride] = Field(default_factory=list)
    variant_properties: List[VariantProperty] = Field(default_factory=list)
    child_components: List[ComponentRef] = Field(default_factory=list)
    variant_states: Optional[List[str]] = None
    style_references: List[StyleReference] = Field(default_factory=list)


# --- aggregate ------------------------------------------------------------

class BlueprintNode(BlueprintModel):
    id: str
    name: str
    type: str
    sibling_index: int = 0
    hierarchy_level: int = 0
    is_instance: bool = False
    visuals: Visuals = Field(default_factory=Visuals)
    typography: Optional[Typography] = None
    layout: Layout = Field(default_factory=Layout)
    geometry: Geometry = Field(default_factory=Geometry)
    semantic: Optional[Semantic] = None
    responsive: Optional[Responsive] = None
    interactivity: Optional[Interactivity] = None
    tokens: Tokens = Field(default_factory=Tokens)
    relationships: Relationships = Field(default_factory=Relationships)
    children: List["BlueprintNode"] = Field(default_factory=list)

    def iter_nodes(self):
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())


BlueprintNode.model_rebuild()


class Diagnostic(BlueprintModel):
    node_id: str
    node_name: str
    stage: str
    level: str = "warning"
    message: str


class ExtractionResult(BlueprintModel):
    blueprint: BlueprintNode
    diagnostics: List[Diagnostic] = Field(default_factory=list)


class AxisReport(BlueprintModel):
    accuracy: int
    flags: Dict[str, bool] = Field(default_factory=dict)


class OverallReport(BlueprintModel):
    accuracy: int
    score: int
    pixel_perfect: bool


class FidelityReport(BlueprintModel):
    node_id: str
    overall: OverallReport
    positioning: AxisReport
    typography: AxisReport
    visuals: AxisReport
    suggestions: List[str] = Field(default_factory=list)


class BenchmarkResult(BlueprintModel):
    average_accuracy: int
    pixel_perfect_count: int
    total_nodes: int
    detailed_results: List[FidelityReport] = Field(default_factory=list)
