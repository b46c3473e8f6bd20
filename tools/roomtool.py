#!/usr/bin/env python3
import argparse, csv, logging, os
from cavebrawl.room import Room
from cavebrawl.tiles import TileLayer

def parse_connectivity(text):
    ids = [int(v) for v in text.split(",")]
    if len(ids) != 4:
        raise argparse.ArgumentTypeError("connectivity needs 4 comma-separated ids (N,E,S,W)")
    return ids

def layer_matrix(room, layer):
    # -1 marks an empty cell; anything else is the tile's texture selector
    w, h = room.grid_size
    return [
        [t.texture if t is not None else -1 for t in (room.tile_at(layer, x, y) for x in range(w))]
        for y in range(h)
    ]

def write_tsv(mat, path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w', newline='') as f:
        w = csv.writer(f, delimiter='\t')
        for r in mat:
            w.writerow(r)

def build_room(args, seed):
    room = Room(0, args.width, args.height, args.connectivity, seed=seed)
    room.generate_room(args.density)
    return room

def cmd_emit(args):
    room = build_room(args, args.seed)
    write_tsv(layer_matrix(room, TileLayer[args.layer.upper()]), args.out)
    print(f"Wrote {args.out} (spawn={room.get_player_spawn()})")

def cmd_batch(args):
    os.makedirs(args.outdir, exist_ok=True)
    for seed in range(args.first_seed, args.first_seed + args.count):
        room = build_room(args, seed)
        path = os.path.join(args.outdir, f"{seed:05d}.tsv")
        write_tsv(layer_matrix(room, TileLayer.FOREGROUND), path)
    print(f"Wrote {args.count} rooms to {args.outdir}")

def main():
    p = argparse.ArgumentParser()
    p.add_argument('--width', type=int, default=20)
    p.add_argument('--height', type=int, default=15)
    p.add_argument('--density', type=float, default=0.45)
    p.add_argument('--connectivity', type=parse_connectivity, default=[1, 1, 1, 1])
    p.add_argument('--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)
    p1 = sub.add_parser('emit')
    p1.add_argument('--seed', type=int, default=None)
    p1.add_argument('--layer', choices=[l.name.lower() for l in TileLayer], default='foreground')
    p1.add_argument('--out', type=str, required=True)
    p1.set_defaults(func=cmd_emit)
    p2 = sub.add_parser('batch')
    p2.add_argument('--first-seed', type=int, default=1)
    p2.add_argument('--count', type=int, default=25)
    p2.add_argument('--outdir', type=str, required=True)
    p2.set_defaults(func=cmd_batch)
    args = p.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    args.func(args)

if __name__ == '__main__':
    main()
