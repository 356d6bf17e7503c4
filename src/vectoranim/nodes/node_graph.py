"""
Node Graph

Arena of animator nodes and the per-frame driver that keeps their cached
transforms up to date.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .transform_descriptor import TransformDescriptor
from .transform_node import LayerTransformNode, NodeKind


logger = logging.getLogger(__name__)


class NodeGraph:
    """
    Owns the animator nodes of one animation.

    Nodes are addressed by integer handles. A parent must be added before
    its children, so arena order is always a valid root-to-leaf traversal
    order and the hierarchy cannot contain cycles.

    Per-frame evaluation (update_frame) runs in three phases:
    1. Mark: refresh local dirty flags from the properties and push
       dirtiness down (a dirty parent makes every child upstream-dirty)
    2. Rebuild: recompute dirty nodes in arena order, parents first
    3. Clear: reset all dirty flags once every node has observed them
    """

    def __init__(self):
        self._nodes: List[LayerTransformNode] = []
        self._handle_by_name: Dict[str, int] = {}
        self._children: Dict[int, List[int]] = {}
        self.last_frame: Optional[float] = None
        self.last_rebuild_count = 0

    def add_transform_node(self, descriptor: TransformDescriptor, parent: Optional[int] = None,
                           name: Optional[str] = None) -> int:
        """
        Add a transform node.

        Args:
            descriptor: Keyframe tracks for the node's transform
            parent: Handle of an existing node, or None for a root
            name: Optional unique name for lookup

        Returns:
            Handle of the new node
        """
        if parent is not None and not 0 <= parent < len(self._nodes):
            raise ValueError(f"Unknown parent handle: {parent}")
        if name is not None and name in self._handle_by_name:
            raise ValueError(f"Duplicate node name: {name}")

        handle = len(self._nodes)
        self._nodes.append(LayerTransformNode(descriptor, parent=parent, name=name))
        self._children[handle] = []
        if parent is not None:
            self._children[parent].append(handle)
        if name is not None:
            self._handle_by_name[name] = handle

        logger.debug("Added transform node %s (handle=%d, parent=%s)", name, handle, parent)
        return handle

    def node(self, handle: int) -> LayerTransformNode:
        """Get the node for a handle."""
        return self._nodes[handle]

    def handle_for(self, name: str) -> Optional[int]:
        """Find a node handle by name."""
        return self._handle_by_name.get(name)

    def parent_of(self, handle: int) -> Optional[int]:
        return self._nodes[handle].parent

    def children_of(self, handle: int) -> List[int]:
        return list(self._children[handle])

    def roots(self) -> List[int]:
        return [handle for handle, node in enumerate(self._nodes) if node.is_root]

    def set_enabled(self, handle: int, enabled: bool):
        """
        Enable or disable a node.

        A disabled node keeps its last outputs and is not rebuilt. Enabling
        it again marks it locally dirty so the next frame rebuilds it.
        """
        node = self._nodes[handle]
        if node.is_enabled == enabled:
            return
        node.is_enabled = enabled
        node.has_local_updates = True
        logger.debug("Node %s %s", node.name, "enabled" if enabled else "disabled")

    def mark_local_updates(self, handle: int):
        """Signal that a node's own properties changed (e.g. an override)."""
        self._nodes[handle].has_local_updates = True

    def mark_upstream_updates(self, handle: int):
        """Signal that a node's parent chain may have changed."""
        self._nodes[handle].has_upstream_updates = True

    def set_value_provider(self, handle: int, keypath: str, provider):
        """
        Override a node property and mark the node locally dirty.

        Args:
            handle: Node handle
            keypath: Property keypath name (e.g. "Rotation Z")
            provider: Replacement value provider
        """
        node = self._nodes[handle]
        node.transform_properties.set_value_provider(keypath, provider)
        node.has_local_updates = True
        logger.debug("Overrode '%s' on node %s", keypath, node.name)

    def update_frame(self, frame: float, force: bool = False) -> int:
        """
        Evaluate every node for a frame.

        Args:
            frame: Frame number
            force: Rebuild every node regardless of dirty state

        Returns:
            Number of nodes rebuilt
        """
        self._mark(frame, force)
        rebuilt = self._rebuild(frame, force)
        self._clear()

        self.last_frame = frame
        self.last_rebuild_count = rebuilt
        logger.debug("Frame %s: rebuilt %d of %d nodes", frame, rebuilt, len(self._nodes))
        return rebuilt

    def _mark(self, frame: float, force: bool):
        for node in self._nodes:
            if node.kind is NodeKind.TRANSFORM:
                props = node.transform_properties
                if force:
                    props.invalidate()
                if force or props.needs_local_update(frame):
                    node.has_local_updates = True
                    props.update_node_properties(frame)
            else:
                raise TypeError(f"Unsupported node kind: {node.kind}")

            if node.parent is not None:
                parent = self._nodes[node.parent]
                if parent.has_local_updates or parent.has_upstream_updates:
                    node.has_upstream_updates = True

    def _rebuild(self, frame: float, force: bool) -> int:
        rebuilt = 0
        for node in self._nodes:
            if not (force or node.last_update_frame is None or node.should_rebuild_outputs(frame)):
                continue
            if not node.is_enabled:
                # Children compose with the cached global transform
                continue

            if node.kind is NodeKind.TRANSFORM:
                parent_global = None
                if node.parent is not None:
                    parent_global = self._nodes[node.parent].global_transform
                node.rebuild_outputs(frame, parent_global)
            else:
                raise TypeError(f"Unsupported node kind: {node.kind}")

            node.last_update_frame = frame
            rebuilt += 1
        return rebuilt

    def _clear(self):
        for node in self._nodes:
            node.has_local_updates = False
            node.has_upstream_updates = False

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[LayerTransformNode]:
        return iter(self._nodes)

    def __repr__(self):
        return f"NodeGraph(nodes={len(self._nodes)}, last_frame={self.last_frame})"
