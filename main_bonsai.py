"""
Bonsai Generation Script

Grows one bonsai and writes every artifact for it. Configuration is loaded
from bonsai.json when present.

Outputs (in outputs/bonsai):
- Render data (.json) for external renderers
- Final tree visualization (.png)
- Growth statistics (.png)
- Growth animation (.gif)
- Metadata (.json) with the seed needed to reproduce the tree
"""

import json
import logging
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

from bonsai import build_tree, load_config, static_render
from bonsai.visualization import animate_growth, plot_growth_statistics, visualize_tree
from rendering import export_frame_data

OUTPUT_DIR = Path('outputs/bonsai')


def main():
    logging.basicConfig(level=logging.INFO, format='%(name)s: %(message)s')

    config = load_config()
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    print(f"Growing {config.strategy} bonsai at {config.width}x{config.height}")
    print(f"  Tiers: {config.tiers}")
    print(f"  Leaf style: {config.leaf_style}")
    print()

    graph = build_tree(config)
    name = f'bonsai_{graph.seed}'

    print(f"Generated {len(graph)} nodes and {len(graph.leaf_clusters)} leaf clusters")

    frame = static_render(graph, config.edge_samples)
    visualize_tree(frame, config.bounds, save_path=str(OUTPUT_DIR / f'{name}_tree.png'), show=False)
    plot_growth_statistics(graph, save_path=str(OUTPUT_DIR / f'{name}_stats.png'), show=False)

    render_data_path = OUTPUT_DIR / f'{name}_render_data.json'
    export_frame_data(graph, frame, str(render_data_path), config.bounds)
    print(f"Exported render data to: {render_data_path}")

    animation_path = OUTPUT_DIR / f'{name}_growth.gif'
    animate_growth(graph, config, save_path=str(animation_path), frame_skip=2, show=False)

    metadata = {
        'seed': graph.seed,
        'num_nodes': len(graph),
        'num_leaf_clusters': len(graph.leaf_clusters),
        'num_points': len(frame),
        'config': config.to_dict(),
        'render_data_path': str(render_data_path),
        'animation_path': str(animation_path),
    }
    metadata_path = OUTPUT_DIR / f'{name}_metadata.json'
    with open(metadata_path, 'w') as f:
        json.dump(metadata, f, indent=2)
    print(f"Saved metadata to {metadata_path}")

    print("\nBonsai complete!")
    print(f"  Reproduce with: \"seed\": {graph.seed} in bonsai.json")


if __name__ == '__main__':
    main()
