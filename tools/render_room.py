#!/usr/bin/env python3
# Render generated rooms to PNGs using Pillow.
# Works with tile filenames like "104.png" or "tile_104.png" under assets/tiles.

import argparse, logging, os
from cavebrawl.room import Room
from cavebrawl.render.snapshot import save_room_png

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--width", type=int, default=20)
    ap.add_argument("--height", type=int, default=15)
    ap.add_argument("--density", type=float, default=0.45)
    ap.add_argument("--connectivity", type=str, default="1,1,1,1", help="N,E,S,W neighbour ids (-1 = none)")
    ap.add_argument("--seed", type=int, default=1, help="First seed")
    ap.add_argument("--count", type=int, default=1, help="How many consecutive seeds to render")
    ap.add_argument("--outdir", type=str, default="out/png", help="Where to write PNGs")
    ap.add_argument("--tile", type=int, default=16, help="Tile size in pixels")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    connectivity = [int(v) for v in args.connectivity.split(",")]
    for seed in range(args.seed, args.seed + args.count):
        room = Room(0, args.width, args.height, connectivity, seed=seed)
        room.generate_room(args.density)
        save_room_png(room, os.path.join(args.outdir, f"room_{seed:05d}.png"), tile_size=args.tile)
    print(f"Wrote PNGs to {args.outdir}")

if __name__ == "__main__":
    main()
