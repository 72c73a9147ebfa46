from chart_renderers.container import Container
from chart_renderers.engine import EngineLoader, EngineLoadError, EngineState, PlotlyEngine, default_loader
from chart_renderers.plot_mount import PlotMount
