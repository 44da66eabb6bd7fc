"""Money-flow Sankey presentation logic for the reports page.

Pure transformation from a ``PnLReport`` to a Sankey model and a Plotly
figure. The layout has three columns:
    Sales by payment method -> Revenue -> Expense categories
with a ``Net profit`` node on the right when the period is profitable and a
``Deficit`` node on the left when expenses exceed sales.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal
from typing import TYPE_CHECKING

from src.domain.models.finance import PnLReport

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


MIDDLE_LABEL = "Revenue"
PROFIT_LABEL = "Net profit"
DEFICIT_LABEL = "Deficit"


@dataclass(frozen=True)
class FlowLink:
    """Sankey link edge."""

    source: int
    target: int
    value: Decimal


@dataclass(frozen=True)
class MoneyFlowModel:
    """Nodes and links of the money-flow Sankey."""

    node_labels: list[str]
    node_sides: list[Literal["L", "M", "R"]]
    links: list[FlowLink]

    @property
    def is_empty(self) -> bool:
        return not self.links


def build_money_flow_model(report: PnLReport) -> MoneyFlowModel:
    """Build the Sankey model of a report.

    Zero-valued sources and categories are left out so the chart only shows
    flows that happened.

    Args:
        report: Profit-and-loss report for the selected range.

    Returns:
        MoneyFlowModel: Nodes and links ready for plotting.
    """
    labels: list[str] = []
    sides: list[Literal["L", "M", "R"]] = []

    def add_node(label: str, side: Literal["L", "M", "R"]) -> int:
        labels.append(label)
        sides.append(side)
        return len(labels) - 1

    links: list[FlowLink] = []
    sources = [
        ("Cash sales", report.sales_by_method.cash),
        ("Bank sales", report.sales_by_method.bank),
    ]
    incoming = [(label, amount) for label, amount in sources if amount > 0]
    outgoing = [
        (category.value.title(), amount)
        for category, amount in report.expenses_by_category.items()
        if amount > 0
    ]
    if not incoming and not outgoing:
        return MoneyFlowModel(node_labels=[], node_sides=[], links=[])

    left_indices = [add_node(label, "L") for label, _amount in incoming]
    middle_index = add_node(MIDDLE_LABEL, "M")
    for index, (_label, amount) in zip(left_indices, incoming):
        links.append(FlowLink(source=index, target=middle_index, value=amount))
    for label, amount in outgoing:
        target = add_node(label, "R")
        links.append(FlowLink(source=middle_index, target=target, value=amount))

    net = report.net_profit
    if net > 0:
        target = add_node(PROFIT_LABEL, "R")
        links.append(FlowLink(source=middle_index, target=target, value=net))
    elif net < 0:
        source = add_node(DEFICIT_LABEL, "L")
        links.append(
            FlowLink(source=source, target=middle_index, value=abs(net))
        )

    return MoneyFlowModel(node_labels=labels, node_sides=sides, links=links)


def _node_positions(
    sides: list[Literal["L", "M", "R"]],
) -> tuple[list[float], list[float]]:
    left_count = sides.count("L")
    right_count = sides.count("R")
    node_x: list[float] = []
    node_y: list[float] = []
    left_seen = 0
    right_seen = 0
    for side in sides:
        if side == "L":
            node_x.append(0.02)
            node_y.append((left_seen + 1) / (left_count + 1))
            left_seen += 1
        elif side == "R":
            node_x.append(0.98)
            node_y.append((right_seen + 1) / (right_count + 1))
            right_seen += 1
        else:
            node_x.append(0.5)
            node_y.append(0.5)
    return node_x, node_y


def build_plotly_figure(model: MoneyFlowModel) -> "go.Figure":
    """Build a Plotly Sankey figure from a money-flow model."""
    node_x, node_y = _node_positions(model.node_sides)

    import plotly.graph_objects as go

    fig = go.Figure(
        data=[
            go.Sankey(
                arrangement="snap",
                node=dict(
                    pad=10,
                    thickness=12,
                    label=model.node_labels,
                    x=node_x,
                    y=node_y,
                    line=dict(color="rgba(0,0,0,0.25)", width=0.5),
                ),
                link=dict(
                    source=[link.source for link in model.links],
                    target=[link.target for link in model.links],
                    value=[float(link.value) for link in model.links],
                ),
                textfont=dict(size=12),
            )
        ]
    )
    fig.update_layout(
        margin=dict(l=8, r=8, t=8, b=8),
        height=420,
    )
    return fig


__all__ = [
    "FlowLink",
    "MoneyFlowModel",
    "build_money_flow_model",
    "build_plotly_figure",
]
