"""Rig loader for JSON-defined layer hierarchies."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from ..config.settings import PROJECT_ROOT
from ..nodes.node_graph import NodeGraph
from ..nodes.transform_descriptor import TransformDescriptor


logger = logging.getLogger(__name__)


@dataclass
class RigLoadResult:
    """Result returned from :class:`RigLoader`."""

    graph: NodeGraph
    handles: Dict[str, int]
    metadata: Dict[str, Any] = field(default_factory=dict)


class RigLoader:
    """
    Load layer rigs from JSON descriptors.

    A rig file looks like::

        {
            "layers": [
                {"name": "root", "transform": {"position": [100, 0, 0]}},
                {"name": "arm", "parent": "root", "transform": {...}}
            ],
            "metadata": {}
        }

    Layers must be listed after their parent.
    """

    def load_rig(self, path: Path | str) -> RigLoadResult:
        """Load a rig from disk."""

        rig_path = Path(path)
        if not rig_path.is_absolute():
            rig_path = PROJECT_ROOT / rig_path
        rig_path = rig_path.resolve()

        if not rig_path.exists():
            raise FileNotFoundError(f"Rig file not found: {rig_path}")

        with rig_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)

        logger.info("Loading rig %s", rig_path)
        return self.build_rig(payload)

    def build_rig(self, payload: Mapping[str, Any]) -> RigLoadResult:
        """Build a rig from an already-decoded payload."""

        graph = NodeGraph()
        handles: Dict[str, int] = {}

        for index, layer in enumerate(payload.get("layers", [])):
            name = layer.get("name", f"Layer_{index}")
            parent_name = layer.get("parent")

            parent = None
            if parent_name is not None:
                if parent_name not in handles:
                    raise ValueError(
                        f"Layer '{name}' references unknown parent '{parent_name}' "
                        "(parents must be listed first)"
                    )
                parent = handles[parent_name]

            descriptor = TransformDescriptor.from_dict(layer.get("transform", {}))
            handles[name] = graph.add_transform_node(descriptor, parent=parent, name=name)

        logger.debug("Built rig with %d layers", len(handles))
        return RigLoadResult(graph=graph, handles=handles, metadata=dict(payload.get("metadata", {})))
