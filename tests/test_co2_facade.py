"""Tests for the CO2 facade, trace results and trace option parsing."""

import logging

import pytest

from carbon_bytes.co2 import CO2, EstimationBackend, TraceOptions, create_backend
from carbon_bytes.errors import ModelCapabilityError
from carbon_bytes.types import ModelType

GB = 1_000_000_000


def test_default_model_is_swd():
    assert CO2().model_type is ModelType.SWD


def test_unknown_model_rejected():
    with pytest.raises(ValueError):
        CO2(model="2byte")


@pytest.mark.parametrize("model_type", list(ModelType))
def test_create_backend_matches_protocol(model_type):
    backend = create_backend(model_type)

    assert isinstance(backend, EstimationBackend)
    assert backend.model_type is model_type


def test_one_byte_per_visit_not_supported():
    backend = CO2(model="1byte")

    with pytest.raises(ModelCapabilityError, match="per_visit"):
        backend.per_visit(GB)
    with pytest.raises(ModelCapabilityError, match="per_visit_trace"):
        backend.per_visit_trace(GB)


def test_per_visit_trace_reports_variables():
    trace = CO2().per_visit_trace(GB, True, {"dataReloadRatio": 0.1})

    assert trace["co2"] == trace.co2
    assert trace.green is True
    assert trace.variables["bytes"] == GB
    assert trace.variables["data_reload_ratio"] == 0.1
    assert trace.variables["first_visit_percentage"] == 0.75
    assert trace.variables["grid_intensity"]["data_center"] == 50.0
    assert trace.co2 == pytest.approx(310.392 * (0.75 + 0.25 * 0.1))


def test_per_visit_trace_without_options_matches_per_visit():
    backend = CO2()

    assert backend.per_visit_trace(GB)["co2"] == pytest.approx(backend.per_visit(GB))


def test_per_byte_trace_for_one_byte():
    trace = CO2(model="1byte").per_byte_trace(GB, False)

    assert trace.co2 == pytest.approx(2240.35, rel=1e-6)
    assert trace.to_dict()["variables"]["grid_intensity"]["data_center"] == 519.0


def test_trace_result_unknown_key():
    with pytest.raises(KeyError):
        CO2().per_byte_trace(GB)["missing"]


def test_segment_flag_returns_breakdown():
    result = CO2(segment=True).per_visit(GB)

    assert isinstance(result, dict)
    assert result["total"] == pytest.approx(270.3051)


class TestTraceOptions:
    def test_parse_camel_case_keys(self):
        options = TraceOptions.parse(
            {
                "gridIntensity": {"device": 100, "dataCenter": 200, "network": 300},
                "dataReloadRatio": 0.3,
                "firstVisitPercentage": 0.6,
                "returnVisitPercentage": 0.4,
            }
        )

        assert options.grid_intensity.device == 100.0
        assert options.grid_intensity.data_center == 200.0
        assert options.grid_intensity.network == 300.0
        assert options.data_reload_ratio == 0.3
        assert options.first_visit_percentage == 0.6
        assert options.return_visit_percentage == 0.4

    def test_parse_none_and_instances(self):
        options = TraceOptions()

        assert TraceOptions.parse(None) == TraceOptions()
        assert TraceOptions.parse(options) is options

    @pytest.mark.parametrize(
        "raw",
        [
            {"dataReloadRatio": 1.5},
            {"dataReloadRatio": "0.5"},
            {"dataReloadRatio": True},
            {"firstVisitPercentage": -0.1},
        ],
    )
    def test_invalid_ratios_fall_back_with_warning(self, raw, caplog):
        with caplog.at_level(logging.WARNING, logger="carbon_bytes.co2.options"):
            options = TraceOptions.parse(raw)

        assert options.data_reload_ratio is None
        assert options.first_visit_percentage is None
        assert "expected a number between 0 and 1" in caplog.text

    def test_country_lookup_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carbon_bytes.co2.options"):
            options = TraceOptions.parse({"gridIntensity": {"device": {"country": "GBR"}}})

        assert options.grid_intensity.device is None
        assert "not supported" in caplog.text

    def test_non_mapping_inputs_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carbon_bytes.co2.options"):
            assert TraceOptions.parse("fast") == TraceOptions()
            assert TraceOptions.parse({"gridIntensity": 5}) == TraceOptions()

    def test_negative_intensity_ignored(self):
        options = TraceOptions.parse({"gridIntensity": {"network": -1}})

        assert options.grid_intensity.network is None
