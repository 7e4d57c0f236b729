"""
Rendering Script

Generates a bonsai and renders it. Configuration is loaded from bonsai.json
when present; command-line flags override individual fields.

Modes:
    ascii   - Print the finished tree as characters (--live replays the growth)
    static  - Save a PNG of the finished tree
    animate - Save a GIF of the growth animation
    export  - Save the static render data as JSON for external renderers
"""

import argparse
import logging
import time
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

from bonsai import AnimationEngine, StaticFrame, build_tree, load_config, static_render
from bonsai.profiling import profile_block, profiler
from bonsai.visualization import animate_growth, preview
from rendering import export_frame_data, render_text

TICK_SECONDS = 0.1


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected an integer >= 1, got {value}")
    return number


def render_ascii(graph, config, live: bool = False):
    """Print the tree; with `live`, redraw after every engine tick."""
    width, height = config.bounds
    if not live:
        print(render_text(static_render(graph, config.edge_samples), width, height))
        return

    engine = AnimationEngine.from_config(graph, config)
    accumulated = StaticFrame()
    for batch in engine:
        accumulated.extend(batch)
        print("\033[H\033[J" + render_text(accumulated, width, height), flush=True)
        time.sleep(TICK_SECONDS)
    print(f"Grown in {engine.ticks} ticks")


def render_static(graph, config, output_dir: Path):
    output_path = output_dir / f'bonsai_{graph.seed}.png'
    preview(graph, config, save_path=str(output_path), show=False)
    return output_path


def render_animation(graph, config, output_dir: Path, frame_skip: int):
    output_path = output_dir / f'bonsai_{graph.seed}_growth.gif'
    animate_growth(graph, config, save_path=str(output_path),
                   frame_skip=frame_skip, show=False)
    return output_path


def render_export(graph, config, output_dir: Path):
    output_path = output_dir / f'bonsai_{graph.seed}_render_data.json'
    frame = static_render(graph, config.edge_samples)
    data = export_frame_data(graph, frame, str(output_path), config.bounds)
    print(f"Exported {len(data['branches'])} branch, {len(data['leaves'])} leaf and "
          f"{len(data['container'])} container points to {output_path}")
    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grow and render a procedural bonsai.")
    parser.add_argument(
        '--mode',
        type=str,
        choices=['ascii', 'static', 'animate', 'export'],
        default='ascii',
        help='Rendering mode: ascii, static, animate, or export (default: ascii)'
    )
    parser.add_argument('--config', type=str, default='bonsai.json',
                        help='JSON config file (missing file = defaults)')
    parser.add_argument('--width', type=int, default=None)
    parser.add_argument('--height', type=int, default=None)
    parser.add_argument('--seed', type=int, default=None, help='Seed for a reproducible tree')
    parser.add_argument('--strategy', type=str, choices=['recursive', 'curved'], default=None)
    parser.add_argument('--container', action='store_true', default=None,
                        help='Reserve the bottom band for a pot')
    parser.add_argument('--symmetric', action='store_true', default=None,
                        help='Centre the tree on its root')
    parser.add_argument('--output', type=str, default='outputs/bonsai',
                        help='Output directory for static, animate and export modes')
    parser.add_argument('--frame-skip', type=positive_int, default=1,
                        help='Keep every Nth tick as a GIF frame')
    parser.add_argument('--live', action='store_true', help='Replay growth in the terminal (ascii mode)')
    parser.add_argument('--profile', action='store_true', help='Print timing statistics at exit')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )
    if args.profile:
        profiler.enable()

    config = load_config(
        args.config,
        width=args.width,
        height=args.height,
        seed=args.seed,
        strategy=args.strategy,
        container=args.container,
        symmetric=args.symmetric,
    )
    graph = build_tree(config)

    if args.mode != 'ascii' or not args.live:
        print(f"Bonsai: {len(graph)} nodes, {len(graph.leaf_clusters)} leaf clusters, "
              f"seed {graph.seed}, {config.width}x{config.height}")

    with profile_block(f'render.{args.mode}'):
        if args.mode == 'ascii':
            render_ascii(graph, config, live=args.live)
            return

        output_dir = Path(args.output)
        output_dir.mkdir(parents=True, exist_ok=True)

        if args.mode == 'static':
            render_static(graph, config, output_dir)
        elif args.mode == 'animate':
            render_animation(graph, config, output_dir, args.frame_skip)
        elif args.mode == 'export':
            render_export(graph, config, output_dir)


if __name__ == '__main__':
    main()
