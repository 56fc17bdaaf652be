"""
Plotting utilities for VNS runs.
Creates convergence plots and per-worker comparison charts.
"""

from typing import Dict, List, Optional
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from config import VIZ_CONFIG


class Plotter:
    """Creates plots for hub location search analysis."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize plotter.

        Args:
            config: Visualization configuration
        """
        self.config = config or VIZ_CONFIG.copy()

        plt.style.use('default')
        sns.set_palette("husl")

        self.fig_size = self.config['figure_size']
        self.dpi = self.config['dpi']
        self.font_size = self.config['font_size']
        self.line_width = self.config['line_width']

    def plot_convergence(self, history: List[float],
                         title: str = "VNS Convergence",
                         target_cost: Optional[float] = None,
                         save_path: Optional[str] = None) -> plt.Figure:
        """
        Plot best cost per VNS iteration.

        Args:
            history: Best cost after each iteration
            title: Plot title
            target_cost: Optional reference line
            save_path: Optional path to save plot

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.fig_size)

        iterations = list(range(1, len(history) + 1))
        ax.plot(iterations, history, linewidth=self.line_width, label='Best cost')

        if target_cost is not None:
            ax.axhline(target_cost, color='red', linestyle='--', label='Target')

        ax.set_xlabel('Iteration', fontsize=self.font_size)
        ax.set_ylabel('Total cost', fontsize=self.font_size)
        ax.set_title(title, fontsize=self.font_size + 2, fontweight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend()
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig

    def plot_worker_costs(self, worker_results: List,
                          title: str = "Worker Results",
                          save_path: Optional[str] = None) -> plt.Figure:
        """
        Bar chart of initial vs final cost for each worker.

        Args:
            worker_results: WorkerResult list
            title: Plot title
            save_path: Optional path to save plot

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.fig_size)

        ids = [w.worker_id for w in worker_results]
        width = 0.4
        ax.bar([i - width / 2 for i in ids], [w.initial_cost for w in worker_results],
               width=width, label='Construction')
        ax.bar([i + width / 2 for i in ids], [w.cost for w in worker_results],
               width=width, label='After VNS')

        ax.set_xlabel('Worker', fontsize=self.font_size)
        ax.set_ylabel('Total cost', fontsize=self.font_size)
        ax.set_xticks(ids)
        ax.set_title(title, fontsize=self.font_size + 2, fontweight='bold')
        ax.legend()
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig
