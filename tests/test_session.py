
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import datetime
import io
import json

import dacite
import pytest

import lddecode
from motecld import motec, session
from motecld.datatypes import ElementType

SESSION_YAML = """\
time: 2024-05-04 14:03:22
driver: A. Driver
vehicle: Miata
venue: Road Atlanta
event: {name: Club Race, session: Q1}
vehicle_info: {id: '42', weight: 1050, type: Spec}
channels:
  - {name: Ground Speed, short_name: SPD, units: km/h, frequency: 20,
     values: [0.0, 10.5, 25.25]}
  - {name: Engine RPM, units: rpm, frequency: 20, type: int16,
     values: [900, 3500, 6200]}
"""


def test_from_dict() -> None:
    log = session.from_dict({
        'time': '2024-05-04T14:03:22',
        'driver': 'A. Driver',
        'event': {'name': 'Club Race'},
        'channels': [{'name': 'Lap', 'frequency': 1, 'type': 'int32',
                      'values': [1, 2]}],
    })
    assert log.time == datetime.datetime(2024, 5, 4, 14, 3, 22)
    assert log.driver == 'A. Driver'
    assert log.event_name == 'Club Race'
    assert log.event_session == ''
    assert log.vehicle_weight == 0
    (ch,) = log.channels
    assert ch.elem_type is ElementType.INT32
    assert list(ch.values) == [1, 2]


def test_missing_time_defaults_to_now() -> None:
    before = datetime.datetime.now()
    log = session.from_dict({})
    assert before <= log.time <= datetime.datetime.now()
    assert log.channels == []


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(dacite.UnexpectedDataError):
        session.from_dict({'drvier': 'typo'})


def test_unknown_channel_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        session.from_dict({'channels': [{'name': 'x', 'frequency': 1, 'type': 'float64'}]})


def test_load_yaml(tmp_path) -> None:
    fname = tmp_path / 'session.yaml'
    fname.write_text(SESSION_YAML, encoding='utf-8')
    log = session.load(str(fname))
    assert log.time == datetime.datetime(2024, 5, 4, 14, 3, 22)
    assert log.vehicle_id == '42'
    assert log.vehicle_weight == 1050
    assert [ch.name for ch in log.channels] == ['Ground Speed', 'Engine RPM']
    assert log.channels[1].elem_type is ElementType.INT16

    f = io.BytesIO()
    motec.write(log, f)
    meta, channels = lddecode.decode(f.getvalue())
    assert meta['date'] == '04/05/2024'
    assert meta['venue_name'] == 'Road Atlanta'
    assert channels[0]['values'] == [0.0, 10.5, 25.25]
    assert channels[1]['values'] == [900, 3500, 6200]


def test_load_json(tmp_path) -> None:
    fname = tmp_path / 'session.json'
    fname.write_text(json.dumps({'venue': 'Sebring',
                                 'vehicle_info': {'weight': 1300}}),
                     encoding='utf-8')
    log = session.load(str(fname))
    assert log.venue == 'Sebring'
    assert log.vehicle_weight == 1300
