from plot.chart_spec import ChartDescriptor
from plot.figure_assembler import assemble_figure, merge_layout
from plot.numeric import linspace, meshgrid, norm_cdf, box_mesh
from plot.registry import CHARTS, ChartNotFoundError, chart_ids, produce
from plot.rich_plot_progress import run_with_progress, show_with_progress, ProgressRunner
