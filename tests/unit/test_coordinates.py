import pytest

from wastesurvey.common.errors import ValidationFailure
from wastesurvey.survey.coordinates import directions_url, normalise_lat_lng, round_coordinate


def test_round_coordinate_six_decimals():
    assert round_coordinate(19.3020524999) == 19.302052
    assert round_coordinate("97.9654491") == 97.965449


def test_normalise_lat_lng_missing_pair_is_none():
    assert normalise_lat_lng(None, None) == (None, None)
    assert normalise_lat_lng("", "") == (None, None)


def test_normalise_lat_lng_rejects_half_pin_and_out_of_range():
    with pytest.raises(ValidationFailure):
        normalise_lat_lng(19.3, None)
    with pytest.raises(ValidationFailure):
        normalise_lat_lng(95.0, 97.9)


def test_directions_url_requires_both_axes():
    assert directions_url(19.302052, 97.965449) == (
        "https://www.google.com/maps/dir/?api=1&destination=19.302052,97.965449"
    )
    assert directions_url(None, 97.9) is None
    assert directions_url(0.0, 97.9) is None
