"""
Analyze population statistics of a life simulation run.
Plots population, food supply and energy over the cycles of a run.
"""

from pathlib import Path
from typing import Dict, Optional, Union

import matplotlib
matplotlib.use('Agg')  # Headless backend, figures are written to files
import matplotlib.pyplot as plt
import numpy as np


def load_stats(filename: Union[str, Path]) -> Optional[Dict[str, np.ndarray]]:
    """Load statistics written by Simulation.save_stats.

    Returns:
        Dictionary of arrays, or None if the file does not exist
    """
    if not Path(filename).exists():
        print(f"Error: {filename} not found. Run a simulation first!")
        return None

    with np.load(filename) as data:
        return {key: data[key] for key in data.files}


def summarize(stats: Dict[str, np.ndarray]) -> Dict[str, float]:
    """Headline numbers for a run."""
    cycles = stats['cycle']
    if len(cycles) == 0:
        return {'cycles': 0, 'final_population': 0, 'peak_population': 0,
                'total_eaten': 0, 'total_starved': 0, 'mean_food': 0.0}
    return {
        'cycles': int(cycles[-1]),
        'final_population': int(stats['agent_count'][-1]),
        'peak_population': int(np.max(stats['agent_count'])),
        'total_eaten': int(np.sum(stats['eaten'])),
        'total_starved': int(np.sum(stats['starved'])),
        'mean_food': float(np.mean(stats['food_count'])),
    }


def plot_history(stats: Dict[str, np.ndarray], title: str = 'Life Simulation',
                 output: Optional[Union[str, Path]] = None):
    """Two-panel figure: population & food, then mean energy.

    Args:
        stats: Statistics dictionary (lists or arrays keyed as in Simulation.stats)
        title: Figure title
        output: If given, save the figure there and close it

    Returns:
        The matplotlib Figure
    """
    cycles = stats['cycle']
    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    fig.suptitle(title, fontsize=16, fontweight='bold')

    # Plot 1: Population and food over time
    ax = axes[0]
    ax.plot(cycles, stats['agent_count'], 'b-', label='Life forms', linewidth=2)
    ax.plot(cycles, stats['food_count'], 'g-', label='Food items', linewidth=2)
    ax.set_ylabel('Count')
    ax.set_title('Population and Food Supply')
    ax.legend()
    ax.grid(True, alpha=0.3)

    # Plot 2: Mean energy
    ax = axes[1]
    ax.plot(cycles, stats['mean_energy'], 'r-', linewidth=2)
    ax.axhline(y=0, color='gray', linestyle='--', alpha=0.5)
    ax.set_xlabel('Cycle')
    ax.set_ylabel('Mean Energy')
    ax.set_title('Mean Energy of Living Life Forms')
    ax.grid(True, alpha=0.3)

    if output:
        fig.savefig(output, dpi=150, bbox_inches='tight')
        plt.close(fig)
        print(f"✓ Figure saved to: {output}")
    return fig
