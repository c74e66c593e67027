import numpy as np


# Line color given to every dataset
DEFAULT_BORDER_COLOR = "rgb(75, 192, 192)"


def chart_data(
    header,
    signals,
    records,
    border_color=DEFAULT_BORDER_COLOR,
    time_labels=False,
):
    """
    Arrange decoded EDF data for a line chart: one x-axis label per
    sample position and one dataset per signal.

    Parameters
    ----------
    header : Header
        The decoded main header.
    signals : list
        The `SignalDescriptor` of each signal.
    records : list
        Every decoded record, each a list of one array per signal, as
        returned by `rdedf`.
    border_color : str, optional
        The line color of every dataset.
    time_labels : bool, optional
        Label the x-axis with elapsed seconds, at the sampling rate of
        the longest signal, instead of sample numbers.

    Returns
    -------
    dict
        `{"labels": [...], "datasets": [...]}`. The labels are
        'Sample 1', 'Sample 2', ... up to the length of the longest
        signal. Each dataset holds the signal's label and all of its
        samples, across records, in order.

    Examples
    --------
    >>> header, signals, records = edfstream.rdedf('sample-data/n16.edf')
    >>> chart = chart_data(header, signals, records)

    """
    datasets = []
    for sig_ind, signal in enumerate(signals):
        series = [record[sig_ind] for record in records]
        data = np.concatenate(series) if series else np.empty(0)
        datasets.append(
            {
                "label": signal.label,
                "data": data.tolist(),
                "borderColor": border_color,
                "fill": False,
            }
        )

    n_labels = max((len(d["data"]) for d in datasets), default=0)
    if time_labels and n_labels:
        fs = max(s.sample_rate(header.record_duration) for s in signals)
        labels = ["{:.3f}s".format(i / fs) for i in range(n_labels)]
    else:
        labels = ["Sample {}".format(i + 1) for i in range(n_labels)]

    return {"labels": labels, "datasets": datasets}
