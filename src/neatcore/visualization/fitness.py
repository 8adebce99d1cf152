"""
Fitness visualization utilities.

Plot the best fitness of a population over the generations of a trial.
"""

from typing import Sequence

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

def plot_fitness(history  : Sequence[tuple[int, float]],
                 save_path: str | None      = None,
                 title    : str             = 'Fitness',
                 ylabel   : str             = 'Fitness',
                 color    : str             = 'steelblue',
                 figsize  : tuple[int, int] = (10, 6)) -> Figure:
    """
    Plot fitness against generation as a line chart.

    Parameters:
        history:   (generation, fitness) pairs, as in 'Trial.fitness_history'
        save_path: path to save the figure to (None = don't save)
        title:     plot title
        ylabel:    y-axis label
        color:     line color
        figsize:   figure size in inches

    Returns:
        the matplotlib figure (the caller owns it)
    """
    generations = [generation for generation, _ in history]
    fitness     = [value      for _, value      in history]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, fitness, color=color, marker='.')
    ax.set_xlabel('Generation')
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
