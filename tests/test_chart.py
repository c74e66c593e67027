import numpy as np

import edfstream
from edfstream.plot.chart import DEFAULT_BORDER_COLOR, chart_data


SIGNALS = [
    {"label": "EEG Fpz-Cz", "num_samples": "4"},
    {"label": "Temp rectal", "num_samples": "1"},
]
RECORDS = [
    [[1, 2, 3, 4], [10]],
    [[5, 6, 7, 8], [20]],
]


class TestChartData:
    """
    Tests for arranging decoded data into chart datasets.
    """

    def test_datasets(self, edf_file):
        header, signals, records = edfstream.rdedf(
            edf_file(signals=SIGNALS, records=RECORDS)
        )
        chart = chart_data(header, signals, records)

        assert [d["label"] for d in chart["datasets"]] == [
            "EEG Fpz-Cz",
            "Temp rectal",
        ]
        eeg = chart["datasets"][0]
        assert eeg["data"] == np.concatenate(
            [records[0][0], records[1][0]]
        ).tolist()
        assert len(chart["datasets"][1]["data"]) == 2
        assert eeg["borderColor"] == DEFAULT_BORDER_COLOR
        assert eeg["fill"] is False

    def test_sample_labels(self, edf_file):
        header, signals, records = edfstream.rdedf(
            edf_file(signals=SIGNALS, records=RECORDS)
        )
        labels = chart_data(header, signals, records)["labels"]
        assert labels == ["Sample {}".format(i) for i in range(1, 9)]

    def test_time_labels(self, edf_file):
        header, signals, records = edfstream.rdedf(
            edf_file(signals=SIGNALS, records=RECORDS, record_duration="2")
        )
        labels = chart_data(header, signals, records, time_labels=True)[
            "labels"
        ]
        assert labels[:3] == ["0.000s", "0.500s", "1.000s"]
        assert len(labels) == 8

    def test_empty(self, edf_file):
        header, signals, records = edfstream.rdedf(
            edf_file(signals=SIGNALS, records=[])
        )
        chart = chart_data(header, signals, records)
        assert chart["labels"] == []
        assert [d["data"] for d in chart["datasets"]] == [[], []]
