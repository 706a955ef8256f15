from __future__ import annotations

import copy
import json
from typing import Any, Callable

import pytest

from tests.helpers import strip_ansi

from bunyan_view.adapters.reader import read_records
from bunyan_view.application.use_cases.format_record import RecordFormatter, coerce_json_indent
from bunyan_view.application.use_cases.timestamps import TS_PADDING
from bunyan_view.domain.modes import OutputMode, UnknownOutputModeError
from bunyan_view.domain.records import REQUIRED_FIELDS

MakeRecord = Callable[..., dict[str, Any]]

INVERSE = "\x1b[7;1;31;47m"
RESET = "\x1b[0m"


def _render(formatter: RecordFormatter, record: dict[str, Any], raw: str | None = None) -> str:
    return "".join(formatter.format(record, raw))


# ---------------------------------------------------------------------------
# long / short


def test_long_mode_renders_header_under_timestamp(make_record: MakeRecord) -> None:
    chunks = RecordFormatter().format(make_record())
    assert chunks == ["---2024.1.2---\n", "03:04.05 [i] app/123 on host: hello\n"]


def test_short_mode_omits_pid_and_hostname(make_record: MakeRecord) -> None:
    chunks = RecordFormatter(output_mode="short").format(make_record(src={"file": "a.js", "line": 1}))
    assert chunks[-1] == "03:04.05 [i] app: hello\n"


def test_long_mode_with_component_src_and_req_id(make_record: MakeRecord) -> None:
    record = make_record(component="web", src={"file": "a.js", "line": 10, "func": "f"}, req_id="abc")
    assert RecordFormatter().format(record)[-1] == "03:04.05 [i] app/web/123 on host (a.js:10 in f): hello (req_id=abc)\n"


def test_extras_follow_empty_message_without_space(make_record: MakeRecord) -> None:
    assert RecordFormatter().format(make_record(msg="", req_id="abc"))[-1] == "03:04.05 [i] app/123 on host: (req_id=abc)\n"


def test_multiline_message_moves_below_header(make_record: MakeRecord) -> None:
    chunks = RecordFormatter().format(make_record(msg="line one\nline two"))
    assert chunks[-1] == f"03:04.05 [i] app/123 on host: \n{TS_PADDING}line one\n{TS_PADDING}line two\n"


def test_request_details_and_resurfaced_keys(make_record: MakeRecord) -> None:
    record = make_record(req={"method": "GET", "url": "/x", "headers": {"Host": "a"}, "foo": "bar"})
    output = _render(RecordFormatter(), record)
    assert f"\n{TS_PADDING}GET /x HTTP/1.1\n" in output
    assert f"\n{TS_PADDING}Host: a\n" in output
    assert f"\n{TS_PADDING}    {{'req.foo': 'bar'}}\n" in output


def test_error_stack_verbatim_and_no_err_leftover(make_record: MakeRecord) -> None:
    record = make_record(err={"stack": "Error: boom\n  at f", "message": "boom"})
    output = _render(RecordFormatter(), record)
    assert f"\n{TS_PADDING}Error: boom\n{TS_PADDING}  at f\n" in output
    assert "err" not in output


def test_detail_order_is_msg_req_res_err_leftover(make_record: MakeRecord) -> None:
    record = make_record(
        msg="multi\nline",
        req={"method": "GET", "url": "/r"},
        res={"statusCode": 200},
        err={"stack": "STACK"},
        extra_field=1,
    )
    output = _render(RecordFormatter(), record)
    positions = [output.index(marker) for marker in ("multi", "GET /r", "HTTP/1.1 200 OK", "STACK", "'extra_field': 1")]
    assert positions == sorted(positions)


def test_leftover_fields_are_dumped_indented(make_record: MakeRecord) -> None:
    output = _render(RecordFormatter(), make_record(user="ann", attempt=2))
    assert f"{TS_PADDING}    {{'user': 'ann', 'attempt': 2}}\n" in output


def test_caller_record_is_not_mutated(make_record: MakeRecord) -> None:
    record = make_record(req={"method": "GET", "url": "/", "x": 1}, err={"stack": "s", "code": 3}, extra=True)
    snapshot = copy.deepcopy(record)
    RecordFormatter().format(record)
    assert record == snapshot


def test_unknown_level_uses_raw_value(make_record: MakeRecord) -> None:
    output = _render(RecordFormatter(color=True), make_record(level=35))
    assert "[35] app/123" in output


def test_consecutive_records_in_same_second_suppress_time(make_record: MakeRecord) -> None:
    formatter = RecordFormatter()
    formatter.format(make_record(msg="first"))
    second = formatter.format(make_record(msg="second", time="2024-01-02T03:04:05.900"))
    assert second == [f"{TS_PADDING}[i] app/123 on host: second\n"]


def test_date_change_emits_banner(make_record: MakeRecord) -> None:
    formatter = RecordFormatter()
    formatter.format(make_record())
    second = formatter.format(make_record(time="2024-01-03T03:04:06"))
    assert second[0] == "---2024.1.3---\n"
    assert second[1].startswith("03:04.06 ")


def test_unparseable_time_still_renders(make_record: MakeRecord) -> None:
    chunks = RecordFormatter().format(make_record(time="not a time"))
    assert chunks[-1].endswith("[i] app/123 on host: hello\n")


# ---------------------------------------------------------------------------
# colour


def test_fatal_level_uses_inverse_style(make_record: MakeRecord) -> None:
    output = _render(RecordFormatter(color=True), make_record(level=60))
    assert f"{INVERSE}[f] {RESET}" in output
    assert f"{INVERSE}app{RESET}" in output


def test_no_escape_codes_without_color(make_record: MakeRecord) -> None:
    record = make_record(
        level=60,
        src={"file": "a.js", "line": 1},
        req={"method": "GET", "url": "/", "extra": {"deep": [1, 2]}},
        leftover={"a": 1},
    )
    output = _render(RecordFormatter(color=False), record)
    assert "\x1b" not in output


def test_colored_leftover_dump_strips_to_plain(make_record: MakeRecord) -> None:
    colored = _render(RecordFormatter(color=True), make_record(user="ann"))
    plain = _render(RecordFormatter(color=False), make_record(user="ann"))
    assert colored != plain
    assert strip_ansi(colored) == plain


@pytest.mark.parametrize("mode", ["long", "inspect"])
def test_colored_long_values_strip_to_plain(make_record: MakeRecord, mode: str) -> None:
    record = make_record(url="https://example.test/" + "a" * 150)
    colored = _render(RecordFormatter(color=True, output_mode=mode), record)
    plain = _render(RecordFormatter(color=False, output_mode=mode), record)
    assert strip_ansi(colored) == plain
    assert record["url"] in plain


# ---------------------------------------------------------------------------
# invalid records


@pytest.mark.parametrize("mode", ["long", "short"])
@pytest.mark.parametrize("field", [name for name in REQUIRED_FIELDS if name != "time"])
def test_invalid_record_passes_raw_text_through_timestamp(make_record: MakeRecord, mode: str, field: str) -> None:
    chunks = RecordFormatter(output_mode=mode).format(make_record(drop=(field,)), raw="raw input line")
    assert chunks == ["---2024.1.2---\n", "03:04.05 raw input line\n"]


@pytest.mark.parametrize("mode", ["long", "short", "simple"])
@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_invalid_records_never_raise(make_record: MakeRecord, mode: str, field: str) -> None:
    chunks = RecordFormatter(output_mode=mode).format(make_record(drop=(field,)), raw="RAW")
    assert chunks[-1].endswith("RAW\n")


def test_invalid_record_without_raw_uses_compact_json(make_record: MakeRecord) -> None:
    record = make_record(drop=("hostname",))
    chunks = RecordFormatter(output_mode="simple").format(record)
    assert chunks == [json.dumps(record, separators=(",", ":")) + "\n"]


# ---------------------------------------------------------------------------
# other modes


def test_simple_mode(make_record: MakeRecord) -> None:
    formatter = RecordFormatter(output_mode=OutputMode.SIMPLE)
    assert formatter.format(make_record(level=40, msg="careful")) == ["WARN - careful\n"]
    assert formatter.format(make_record(level=45)) == ["LVL45 - hello\n"]


@pytest.mark.parametrize("indent", [0, 2, 4, True, False])
def test_json_mode_round_trips(make_record: MakeRecord, indent: int | bool) -> None:
    record = make_record(req={"method": "GET", "headers": {"a": "b"}}, tags=["x", "y"], text="ünïcode")
    output = _render(RecordFormatter(output_mode="json", json_indent=indent), record)
    assert output.endswith("\n")
    assert json.loads(output) == record


def test_json_mode_indents_when_configured(make_record: MakeRecord) -> None:
    output = _render(RecordFormatter(output_mode="json", json_indent=2), make_record())
    assert output.startswith('{\n  "v": 0,\n')


def test_bunyan_mode_is_compact_single_line(make_record: MakeRecord) -> None:
    record = make_record()
    output = _render(RecordFormatter(output_mode="bunyan", json_indent=4), record)
    assert output == json.dumps(record, separators=(",", ":")) + "\n"


def test_json_modes_skip_validation(make_record: MakeRecord) -> None:
    record = {"anything": 1}
    assert _render(RecordFormatter(output_mode="json"), record) == '{"anything":1}\n'
    assert _render(RecordFormatter(output_mode="bunyan"), make_record(drop=("msg",))).count("\n") == 1


def test_inspect_mode_dumps_whole_record(make_record: MakeRecord) -> None:
    output = _render(RecordFormatter(output_mode="inspect"), make_record(nested={"a": {"b": {"c": [1]}}}))
    assert output.endswith("\n")
    assert "'msg': 'hello'" in output
    assert "'c': [1]" in output
    assert "\x1b" not in output


def test_inspect_mode_colorizes_when_enabled(make_record: MakeRecord) -> None:
    output = _render(RecordFormatter(output_mode="inspect", color=True), make_record())
    assert "\x1b[" in output


def test_unknown_mode_is_fatal(make_record: MakeRecord) -> None:
    formatter = RecordFormatter()
    formatter._mode = "bogus"  # type: ignore[assignment]
    with pytest.raises(UnknownOutputModeError, match="unknown output mode"):
        formatter.format(make_record())


# ---------------------------------------------------------------------------
# streaming surface


def test_transform_streams_records_and_passthrough_lines(make_record: MakeRecord) -> None:
    formatter = RecordFormatter(output_mode="simple")
    items = [make_record(msg="one"), (None, "not json"), (make_record(msg="two"), '{"raw": 1}')]
    assert list(formatter.transform(items)) == ["INFO - one\n", "not json\n", "INFO - two\n"]


def test_transform_consumes_decoded_input_lines(make_record: MakeRecord) -> None:
    lines = [json.dumps(make_record(msg="one")) + "\n", "noise\n", '{"time": "2024-01-02T03:04:05", "partial": true}\n']
    formatter = RecordFormatter(output_mode="short")
    assert list(formatter.transform(read_records(lines))) == [
        "---2024.1.2---\n",
        "03:04.05 [i] app: one\n",
        "noise\n",
        f'{TS_PADDING}{{"time": "2024-01-02T03:04:05", "partial": true}}\n',
    ]


class _Recorder:
    def __init__(self) -> None:
        self.chunks: list[str] = []
        self.flushes = 0

    def write(self, chunk: str) -> None:
        self.chunks.append(chunk)

    def flush(self) -> None:
        self.flushes += 1


def test_write_flushes_once_per_record(make_record: MakeRecord) -> None:
    formatter = RecordFormatter()
    recorder = _Recorder()
    formatter.write(make_record(), recorder)
    formatter.write(make_record(msg="again"), recorder)
    assert recorder.chunks == [
        "---2024.1.2---\n",
        "03:04.05 [i] app/123 on host: hello\n",
        f"{TS_PADDING}[i] app/123 on host: again\n",
    ]
    assert recorder.flushes == 2


def test_properties_reflect_configuration() -> None:
    formatter = RecordFormatter(color=True, output_mode="4", json_indent=True)
    assert formatter.color is True
    assert formatter.output_mode is OutputMode.SIMPLE
    assert formatter.json_indent == 2


@pytest.mark.parametrize("value", [-1, "x", 1.5j])
def test_coerce_json_indent_rejects_bad_values(value: object) -> None:
    with pytest.raises(ValueError, match="json indent"):
        coerce_json_indent(value)
