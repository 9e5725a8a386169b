"""Tests for single-pass streaming aggregation"""

import pytest

from pcap_aggregator.capture.aggregator import RecordOutcome, StreamingAggregator
from pcap_aggregator.capture.emitter import format_table
from pcap_aggregator.capture.reader import CaptureRecord
from tests.pcap_helpers import make_record, write_pcap


@pytest.fixture
def aggregator(src_mac, window):
    return StreamingAggregator(src_mac, window)


class TestUpdate:
    def test_mixed_sequence(self, aggregator, src_mac, other_mac, window):
        t0 = window.first_micros + 1_000
        t1 = window.first_micros + 3_500
        t2 = window.first_micros + 5_000
        t3 = window.last_micros + 1
        records = [
            make_record(src_mac, t0, wirelen=60),
            make_record(src_mac, t1, wirelen=1514),
            make_record(other_mac, t2, wirelen=60),
            make_record(src_mac, t3, wirelen=60),
        ]

        outcomes = [aggregator.update(record) for record in records]

        assert outcomes == [
            RecordOutcome.CONTINUE,
            RecordOutcome.CONTINUE,
            RecordOutcome.SKIP,
            RecordOutcome.HALT,
        ]
        assert aggregator.length_table == {60: 1, 1514: 1}
        assert aggregator.interval_table == {t1 - t0: 1}

    def test_other_source_does_not_move_cursor(self, aggregator, src_mac, other_mac, window):
        t0 = window.first_micros + 10
        aggregator.update(make_record(src_mac, t0))
        aggregator.update(make_record(other_mac, t0 + 5))
        aggregator.update(make_record(src_mac, t0 + 20))

        assert aggregator.interval_table == {20: 1}
        assert aggregator.prev_arrival == t0 + 20

    def test_first_counted_record_has_no_interval(self, aggregator, src_mac, window):
        assert aggregator.update(make_record(src_mac, window.first_micros)) is RecordOutcome.CONTINUE
        assert sum(aggregator.length_table.values()) == 1
        assert not aggregator.interval_table

    def test_window_bounds_are_inclusive(self, aggregator, src_mac, window):
        assert aggregator.update(make_record(src_mac, window.first_micros)) is RecordOutcome.CONTINUE
        assert aggregator.update(make_record(src_mac, window.last_micros)) is RecordOutcome.CONTINUE
        assert aggregator.interval_table == {window.last_micros - window.first_micros: 1}

    def test_records_before_window_are_skipped_not_halting(self, aggregator, src_mac, window):
        early = make_record(src_mac, window.first_micros - 1)
        inside = make_record(src_mac, window.first_micros + 7)

        assert aggregator.update(early) is RecordOutcome.SKIP
        assert aggregator.update(inside) is RecordOutcome.CONTINUE
        assert not aggregator.interval_table
        assert aggregator.prev_arrival == window.first_micros + 7

    def test_other_source_past_window_does_not_halt(self, aggregator, other_mac, window):
        late = make_record(other_mac, window.last_micros + 1_000_000)
        assert aggregator.update(late) is RecordOutcome.SKIP

    def test_short_frames_are_skipped(self, aggregator, src_mac, window):
        short = CaptureRecord(
            data=b"\xff" * 6 + bytes(src_mac)[:3],
            sec=window.first_micros // 1_000_000,
            usec=0,
            wirelen=9,
        )
        assert aggregator.update(short) is RecordOutcome.SKIP
        assert not aggregator.length_table

    def test_source_mac_is_read_from_bytes_6_to_11(self, aggregator, src_mac, window):
        as_destination = CaptureRecord(
            data=bytes(src_mac) + b"\xff" * 6 + b"\x08\x00",
            sec=window.first_micros // 1_000_000,
            usec=0,
            wirelen=14,
        )
        assert aggregator.update(as_destination) is RecordOutcome.SKIP

    def test_length_uses_declared_wire_length(self, aggregator, src_mac, window):
        aggregator.update(make_record(src_mac, window.first_micros, wirelen=9000))
        assert aggregator.length_table == {9000: 1}

    def test_equal_timestamps_give_zero_interval(self, aggregator, src_mac, window):
        aggregator.update(make_record(src_mac, window.first_micros + 1))
        aggregator.update(make_record(src_mac, window.first_micros + 1))
        assert aggregator.interval_table == {0: 1}

    def test_counts_accumulate(self, aggregator, src_mac, window):
        for i in range(1, 6):
            aggregator.update(make_record(src_mac, window.first_micros + i * 100, wirelen=64))
        assert aggregator.length_table == {64: 5}
        assert aggregator.interval_table == {100: 4}


class TestConsume:
    def test_stops_reading_at_halt(self, aggregator, src_mac, window):
        consumed = []

        def records():
            for offset in (0, 10, window.last_micros - window.first_micros + 1, 20):
                record = make_record(src_mac, window.first_micros + offset)
                consumed.append(record)
                yield record

        assert aggregator.consume(records()) is False
        assert len(consumed) == 3
        assert aggregator.summary.halted

    def test_exhausted_returns_true(self, aggregator, src_mac, window):
        assert aggregator.consume([make_record(src_mac, window.first_micros)]) is True
        assert not aggregator.summary.halted


class TestScan:
    def test_cursor_carries_across_files(self, aggregator, src_mac, window, tmp_path):
        start = window.first_micros
        first = write_pcap(tmp_path / "1.pcap", [make_record(src_mac, start + 100)])
        second = write_pcap(tmp_path / "2.pcap", [make_record(src_mac, start + 350)])

        summary = aggregator.scan([first, second])

        assert aggregator.interval_table == {250: 1}
        assert summary.files_read == 2
        assert summary.records_counted == 2

    def test_halt_skips_all_later_files(self, aggregator, src_mac, window, tmp_path):
        start = window.first_micros
        first = write_pcap(
            tmp_path / "1.pcap",
            [
                make_record(src_mac, start + 100),
                make_record(src_mac, window.last_micros + 1),
                make_record(src_mac, start + 200),
            ],
        )
        # Out of order on purpose: must never be reached
        second = write_pcap(tmp_path / "2.pcap", [make_record(src_mac, start + 300, wirelen=999)])

        summary = aggregator.scan([first, second])

        assert sum(aggregator.length_table.values()) == 1
        assert 999 not in aggregator.length_table
        assert not aggregator.interval_table
        assert summary.halted
        assert summary.files_read == 1
        assert summary.records_read == 2

    def test_unreadable_files_are_skipped(self, aggregator, src_mac, window, tmp_path):
        garbage = tmp_path / "garbage.pcap"
        garbage.write_bytes(b"not a capture")
        good = write_pcap(tmp_path / "good.pcap", [make_record(src_mac, window.first_micros)])

        summary = aggregator.scan([tmp_path / "missing.pcap", garbage, good])

        assert summary.files_selected == 3
        assert summary.files_skipped == 2
        assert summary.files_read == 1
        assert sum(aggregator.length_table.values()) == 1

    def test_skipped_file_is_logged(self, aggregator, tmp_path, caplog):
        with caplog.at_level("WARNING"):
            aggregator.scan([tmp_path / "missing.pcap"])
        assert "missing.pcap" in caplog.text

    def test_rescan_is_identical(self, src_mac, other_mac, window, tmp_path):
        start = window.first_micros
        paths = [
            write_pcap(
                tmp_path / f"{n}.pcap",
                [
                    make_record(src_mac, start + n * 1_000 + 1, wirelen=60 + n),
                    make_record(other_mac, start + n * 1_000 + 2),
                    make_record(src_mac, start + n * 1_000 + 7, wirelen=1514),
                ],
            )
            for n in range(3)
        ]

        runs = []
        for _ in range(2):
            aggregator = StreamingAggregator(src_mac, window)
            aggregator.scan(paths)
            runs.append(
                (format_table(aggregator.length_table), format_table(aggregator.interval_table))
            )

        assert runs[0] == runs[1]
        assert runs[0][0] == "60\t1\n61\t1\n62\t1\n1514\t3\n"
        assert runs[0][1] == "6\t3\n994\t2\n"
