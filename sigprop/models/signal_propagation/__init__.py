from .signal_propagation import SignalPropagation
from .signal_propagation_model import SignalPropagationModel, compute_signal_propagations
from .light_time import solve_light_time
