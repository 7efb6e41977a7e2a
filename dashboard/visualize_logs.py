from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd
import plotly.express as px


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Visualize fulfillment simulator CSV logs with Plotly.")
    p.add_argument("--log", type=str, required=True, help="Path to fulfillment_orders_*.csv")
    p.add_argument("--outdir", type=str, default="data/logs", help="Directory to write HTML plots")
    return p.parse_args()


def load_log(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path)
    df["queue_wait"] = df["ready_time"] - df["admitted_time"]
    df["lead_time"] = df["shipped_time"] - df["admitted_time"]
    return df


def main() -> None:
    args = parse_args()
    log_path = Path(args.log)
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    df = load_log(log_path)
    df_routed = df[df["ready_time"].notna()].copy()

    # Higher priorities should wait less in the pending queue
    fig_wait = px.box(
        df_routed,
        x="priority",
        y="queue_wait",
        points="all",
        title="Pending-queue wait by priority (routed orders only)",
    )
    wait_out = outdir / f"{log_path.stem}_wait_by_priority.html"
    fig_wait.write_html(wait_out)

    fig_cost = px.histogram(
        df_routed,
        x="route_cost",
        color="item_name",
        title="Route cost from depot (routed orders only)",
    )
    cost_out = outdir / f"{log_path.stem}_route_cost_hist.html"
    fig_cost.write_html(cost_out)

    fig_state = px.bar(
        df.groupby("state").size().reset_index(name="orders"),
        x="state",
        y="orders",
        title="Final order state",
    )
    state_out = outdir / f"{log_path.stem}_final_state.html"
    fig_state.write_html(state_out)

    print(f"wrote={wait_out}")
    print(f"wrote={cost_out}")
    print(f"wrote={state_out}")


if __name__ == "__main__":
    main()
