"""Chart engine: windowing, scaling, moving averages, cursor, projection."""

from stockterm.chart.axis import AxisScale, GridLevel, scale_axis
from stockterm.chart.cursor import Cursor
from stockterm.chart.frame import ChartFrame, Viewport, build_chart_frame
from stockterm.chart.indicators import MovingAverage, compute_ma, compute_overlays
from stockterm.chart.projector import Projector, index_to_col, price_to_row
from stockterm.chart.series import BarSeries
from stockterm.chart.window import CANDLE_WIDTH, PAN_STEP, Window, select_window

__all__ = [
    "AxisScale",
    "BarSeries",
    "CANDLE_WIDTH",
    "ChartFrame",
    "Cursor",
    "GridLevel",
    "MovingAverage",
    "PAN_STEP",
    "Projector",
    "Viewport",
    "Window",
    "build_chart_frame",
    "compute_ma",
    "compute_overlays",
    "index_to_col",
    "price_to_row",
    "scale_axis",
    "select_window",
]
