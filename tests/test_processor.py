"""Test response interpretation and printed output."""
import io
import json
import logging

import pytest

from liveness_client.errors import ServiceStatusError
from liveness_client.processor import decode_result, pretty_print, process_response
from liveness_client.schemas import LivenessResult

LIVE_BODY = b'{"Success":true,"State":"x","JobID":"j","Samples":[{"Errors":[],"EyeCenters":{}}]}'


def _run(status_code, body, detailed):
    out = io.StringIO()
    result = process_response(status_code, body, detailed, out=out)
    return result, out.getvalue()


def test_plain_body_printed_verbatim():
    body = b"not json at all, just words"
    result, output = _run(200, body, detailed=False)
    assert result is None
    assert output == "not json at all, just words\n"


def test_plain_body_bytes_are_kept():
    """Non UTF-8 bytes go to the binary buffer untouched."""
    raw = io.BytesIO()
    out = io.TextIOWrapper(raw, encoding="utf-8")
    body = b"caf\xe9 \xff\xfe"

    process_response(200, body, False, out=out)

    assert raw.getvalue() == body + b"\n"


def test_live_verdict():
    result, output = _run(200, LIVE_BODY, detailed=True)
    assert result.success is True
    assert "Result:\nImages are recorded from a live person.\n" in output
    assert "NOT" not in output


def test_not_live_verdict():
    body = LIVE_BODY.replace(b'"Success":true', b'"Success":false')
    _, live_output = _run(200, LIVE_BODY, detailed=True)
    _, output = _run(200, body, detailed=True)

    assert "Result:\nImages are NOT recorded from a live person.\n" in output
    changed = [
        (a, b) for a, b in zip(live_output.splitlines(), output.splitlines()) if a != b
    ]
    # only the Success field and the verdict differ
    assert len(changed) == 2


@pytest.mark.parametrize("value", [b'"true"', b"1", b'"yes"', b'"on"'])
def test_malformed_success_is_not_live(value, caplog):
    """A Success value that is not a JSON boolean never yields a live verdict."""
    body = b'{"Success":' + value + b',"JobID":"j","Samples":[]}'

    with caplog.at_level(logging.WARNING, logger="liveness_client"):
        result, output = _run(200, body, detailed=True)

    assert result.success is False
    assert result.job_id == "j"
    assert "Can not unmarshal JSON." in caplog.text
    assert "Images are NOT recorded from a live person." in output


def test_detailed_body_is_pretty_printed():
    _, output = _run(200, LIVE_BODY, detailed=True)
    assert output.startswith("Detailed response body:\n{\n\t\"Success\": true,")
    assert "\t\"JobID\": \"j\"" in output
    assert "\"RightEyeX\": 0.0" in output


@pytest.mark.parametrize("detailed", [False, True])
def test_non_200_is_fatal(detailed):
    with pytest.raises(ServiceStatusError) as exc_info:
        _run(403, LIVE_BODY, detailed)
    assert exc_info.value.status_code == 403
    assert "403" in str(exc_info.value)


@pytest.mark.parametrize("status_code", [201, 204, 302, 500])
def test_other_success_codes_are_fatal(status_code):
    with pytest.raises(ServiceStatusError):
        _run(status_code, b"", detailed=False)


def test_sample_errors_in_order():
    document = {
        "Success": False,
        "State": "Rejected",
        "JobID": "abc",
        "Samples": [
            {"Errors": [], "EyeCenters": {"RightEyeX": 1.5}},
            {"Errors": [
                {"Code": "NoFaceFound", "Message": "No face", "Details": "first"},
                {"Code": "MultipleFacesFound", "Message": "Two faces", "Details": "second"},
            ]},
        ],
    }
    _, output = _run(200, json.dumps(document).encode(), detailed=True)

    tail = output.split("Images are NOT recorded from a live person.\n", 1)[1]
    assert tail == (
        "Errors found for image2:\n"
        "NoFaceFound - No face - first\n"
        "MultipleFacesFound - Two faces - second\n"
    )


def test_invalid_json_is_lenient(caplog):
    with caplog.at_level(logging.WARNING, logger="liveness_client"):
        result, output = _run(200, b"<html>oops</html>", detailed=True)

    assert result == LivenessResult()
    assert "Can not unmarshal JSON." in caplog.text
    assert "Images are NOT recorded from a live person." in output


class TestDecodeResult:
    """Test the best-effort decoder."""

    def test_full_document(self):
        body = json.dumps({
            "Success": True,
            "State": "LiveDetected",
            "JobID": "0f7",
            "Samples": [{
                "Errors": [{"Code": "c", "Message": "m", "Details": "d"}],
                "EyeCenters": {"RightEyeX": 1, "RightEyeY": 2.5, "LeftEyeX": 3, "LeftEyeY": 4},
            }],
        }).encode()

        result = decode_result(body)
        assert result.job_id == "0f7"
        assert result.samples[0].errors[0].details == "d"
        assert result.samples[0].eye_centers.right_eye_y == 2.5
        assert result.samples[0].eye_centers.left_eye_x == 3.0

    def test_non_object_document(self, caplog):
        with caplog.at_level(logging.WARNING, logger="liveness_client"):
            assert decode_result(b"[1, 2, 3]") == LivenessResult()
        assert "Can not unmarshal JSON." in caplog.text

    def test_wrong_field_type_keeps_the_rest(self, caplog):
        body = json.dumps({
            "Success": True,
            "State": 7,
            "JobID": "j",
            "Samples": [
                {"Errors": [{"Code": "c", "Message": None, "Details": "d"}]},
                "garbage",
            ],
        }).encode()

        with caplog.at_level(logging.WARNING, logger="liveness_client"):
            result = decode_result(body)

        assert "Can not unmarshal JSON." in caplog.text
        assert result.success is True
        assert result.state == ""
        assert result.job_id == "j"
        assert len(result.samples) == 2
        assert result.samples[0].errors[0].code == "c"
        assert result.samples[0].errors[0].message == ""
        assert result.samples[1].errors == []

    def test_unknown_fields_are_ignored(self):
        result = decode_result(b'{"Success": true, "Extra": {"a": 1}}')
        assert result.success is True

    def test_pretty_print_uses_wire_names(self):
        text = pretty_print(LivenessResult(success=True, job_id="j"))
        assert json.loads(text)["JobID"] == "j"
        assert "\n\t\"Success\": true" in text
