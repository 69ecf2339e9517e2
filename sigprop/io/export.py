""" Tabular export of solved signals """
import pandas as pd

from sigprop.common_log import get_logger, IO_LOG

__all__ = ["signals_to_dataframe", "export_to_csv"]

COLUMNS = ["Emission [s J2000]", "Reception [s J2000]", "Duration [s]", "Vector x [m]", "Vector y [m]",
           "Vector z [m]"]


def signals_to_dataframe(signals, frame=None, mu=None):
    """
    Builds a table with one row per solved signal.

    Args:
        signals(list[sigprop.models.signal_propagation.SignalPropagation]): solved signals
        frame(sigprop.models.frames.Frame or None): frame of the propagation vector (working frame when None)
        mu(float or sigprop.models.bodies.CelestialBody or None): when provided, a Shapiro delay column is added
    Returns:
        pandas.DataFrame: dates as seconds from J2000, propagation duration and propagation vector components
    """
    rows = []
    for signal in signals:
        vector = signal.get_vector(frame)
        row = [signal.emission_date.j2000_seconds, signal.reception_date.j2000_seconds,
               signal.get_signal_propagation_duration(), *vector]
        if mu is not None:
            row.append(signal.get_shapiro_time_correction(mu))
        rows.append(row)

    columns = COLUMNS + (["Shapiro [s]"] if mu is not None else [])
    return pd.DataFrame(rows, columns=columns)


def export_to_csv(signals, path, frame=None, mu=None):
    """
    Writes the table of :py:func:`signals_to_dataframe` to a CSV file.

    Args:
        signals(list[sigprop.models.signal_propagation.SignalPropagation]): solved signals
        path(str or pathlib.Path): output file
        frame(sigprop.models.frames.Frame or None): frame of the propagation vector
        mu(float or sigprop.models.bodies.CelestialBody or None): optional Shapiro delay column
    Returns:
        pandas.DataFrame: the exported table
    """
    df = signals_to_dataframe(signals, frame, mu)
    get_logger(IO_LOG).info(f"Writing {len(df)} solved signals to {path}...")
    df.to_csv(path, index=False, float_format="%.15e")
    return df
