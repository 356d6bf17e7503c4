#!/usr/bin/env python3
"""
Rig Playback Example

Loads the swinging arm rig and prints each layer's opacity and world
position for a range of frames.
"""

import argparse
import logging
import sys
sys.path.insert(0, '..')

from src.vectoranim import RigLoader, RIGS_DIR
from src.vectoranim.nodes import transform_point


def main():
    parser = argparse.ArgumentParser(description="Evaluate a layer rig frame by frame")
    parser.add_argument("rig", nargs="?", default=str(RIGS_DIR / "swinging_arm.json"))
    parser.add_argument("--start", type=float, default=0.0)
    parser.add_argument("--end", type=float, default=60.0)
    parser.add_argument("--step", type=float, default=5.0)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    result = RigLoader().load_rig(args.rig)
    graph = result.graph

    frame = args.start
    while frame <= args.end:
        rebuilt = graph.update_frame(frame)
        print(f"Frame {frame:6.1f}  (rebuilt {rebuilt}/{len(graph)})")
        for name, handle in result.handles.items():
            node = graph.node(handle)
            origin = transform_point(node.global_transform, (0.0, 0.0, 0.0))
            print(f"  {name:<10} opacity={node.opacity:4.2f}  "
                  f"origin=({origin[0]:8.2f}, {origin[1]:8.2f}, {origin[2]:6.2f})")
        frame += args.step


if __name__ == '__main__':
    main()
