# Geometry, placement and serialization tools used by presets and the save pipeline.

from trackgen.tools.blueprint_factory import (
    make_blueprint,
    make_spawn_point,
    translate_blueprint,
    rotate_blueprint,
    instance_from_parsed,
)

from trackgen.tools.placement_tools import (
    build_segment_line,
    build_segment_path,
    generate_grid,
    generate_hoop_loop,
    generate_node_mesh,
    generate_random_scatter,
)

from trackgen.tools.blueprint_converter import (
    remove_superimposed_duplicates,
    normalize_instance,
    prepare_instances,
)

from trackgen.tools.unit_decomposer import decompose_units, UnitGroup

__all__ = [
    # Blueprint factory
    "make_blueprint",
    "make_spawn_point",
    "translate_blueprint",
    "rotate_blueprint",
    "instance_from_parsed",
    # Primitive action
    "build_segment_line",
    "build_segment_path",
    # Composite actions
    "generate_grid",
    "generate_hoop_loop",
    "generate_node_mesh",
    "generate_random_scatter",
    # Save pipeline
    "remove_superimposed_duplicates",
    "normalize_instance",
    "prepare_instances",
    # Unit decomposition
    "decompose_units",
    "UnitGroup",
]
