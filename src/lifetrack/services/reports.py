"""Spending chart rendering for exports."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .budgeting import ChartSlice

MAX_LEGEND_ITEMS = 12


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def build_spending_chart(
    slices: Iterable[ChartSlice],
    *,
    currency: str = "",
    title: str = "Spending by Category",
) -> Figure:
    """Create a matplotlib donut chart of spend per category.

    Slices are drawn largest first with the period total in the centre and a
    legend listing amount and share per category.
    """

    ordered = sorted((s for s in slices if s.amount > 0), key=lambda s: s.amount, reverse=True)
    grand_total = sum(s.amount for s in ordered)

    fig, ax = plt.subplots(figsize=(10, 7))

    if not ordered:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        return fig

    sizes = [s.amount for s in ordered]
    labels = [s.category for s in ordered]
    percentages = [size / grand_total * 100 for size in sizes]

    cmap = plt.get_cmap("tab20c")
    colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]
    wedges, _, autotexts = ax.pie(
        sizes,
        labels=None,
        autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        startangle=90,
        colors=colors,
        pctdistance=0.78,
    )
    for autotext in autotexts:
        autotext.set_fontsize(9)
        autotext.set_fontweight("bold")
        autotext.set_color("white")

    ax.text(0, 0.08, "Total Spending", ha="center", va="center", fontsize=11, color="#666")
    ax.text(
        0, -0.08, f"{currency}{grand_total:,.2f}",
        ha="center", va="center", fontsize=18, fontweight="bold", color="#1F2937",
    )

    shown = min(len(labels), MAX_LEGEND_ITEMS)
    legend_labels = [
        f"{labels[i]}: {currency}{sizes[i]:,.2f} ({percentages[i]:.1f}%)" for i in range(shown)
    ]
    legend_wedges = list(wedges[:shown])
    if len(labels) > MAX_LEGEND_ITEMS:
        other_total = sum(sizes[MAX_LEGEND_ITEMS:])
        other_pct = sum(percentages[MAX_LEGEND_ITEMS:])
        legend_labels.append(
            f"Other ({len(labels) - MAX_LEGEND_ITEMS} more): {currency}{other_total:,.2f} ({other_pct:.1f}%)"
        )
        legend_wedges.append(wedges[-1])

    ax.legend(
        legend_wedges,
        legend_labels,
        title="Categories",
        title_fontsize=11,
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        fontsize=9,
        framealpha=0.9,
    )
    ax.axis("equal")
    ax.set_title(title, fontsize=16, fontweight="bold", pad=20)
    fig.tight_layout()
    return fig


def export_spending_png(
    slices: Iterable[ChartSlice],
    *,
    output_path: Path,
    currency: str = "",
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the spending chart to PNG and return the path."""

    fig = build_spending_chart(slices, currency=currency)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if renderer is not None:
            renderer.render(fig, output_path=output_path)
        else:
            fig.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(fig)
    return output_path
