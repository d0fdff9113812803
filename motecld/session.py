
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Session descriptions: everything needed to build a LogFile, stored
# as JSON or YAML.  Example (YAML):
#
#   time: 2024-05-04 14:03:22
#   driver: A. Driver
#   venue: Road Atlanta
#   event: {name: Club Race, session: Q1}
#   vehicle_info: {id: '42', weight: 1250, type: GT3}
#   channels:
#     - {name: Ground Speed, short_name: SPD, units: km/h, frequency: 20,
#        values: [0.0, 10.5, 25.3]}
#     - {name: Engine RPM, units: rpm, frequency: 20, type: int16,
#        values: [900, 3500, 6200]}

from dataclasses import dataclass, field
import datetime
import json
import logging
import os
import typing

import dacite
import yaml

from . import base
from . import datatypes
from .datatypes import ElementType

logger = logging.getLogger(__name__)

@dataclass
class EventConfig:
    name: str = ''
    session: str = ''
    comment: str = ''

@dataclass
class VehicleConfig:
    id: str = ''
    weight: int = 0 # kg
    type: str = ''
    comment: str = ''

@dataclass
class ChannelConfig:
    name: str
    frequency: int
    short_name: str = ''
    units: str = ''
    type: ElementType = ElementType.FLOAT32
    values: list = field(default_factory=list)

@dataclass
class SessionConfig:
    time: typing.Optional[datetime.datetime] = None
    driver: str = ''
    vehicle: str = ''
    venue: str = ''
    short_comment: str = ''
    event: EventConfig = field(default_factory=EventConfig)
    vehicle_info: VehicleConfig = field(default_factory=VehicleConfig)
    channels: typing.List[ChannelConfig] = field(default_factory=list)

def _parse_time(val):
    if isinstance(val, datetime.datetime):
        return val
    return datetime.datetime.fromisoformat(val)

_dacite_config = dacite.Config(
    type_hooks={datetime.datetime: _parse_time,
                ElementType: datatypes.element_type},
    strict=True)

def to_logfile(cfg):
    log = base.LogFile(
        time=cfg.time if cfg.time is not None else datetime.datetime.now(),
        driver=cfg.driver,
        vehicle=cfg.vehicle,
        venue=cfg.venue,
        short_comment=cfg.short_comment,
        event_name=cfg.event.name,
        event_session=cfg.event.session,
        event_comment=cfg.event.comment,
        vehicle_id=cfg.vehicle_info.id,
        vehicle_weight=cfg.vehicle_info.weight,
        vehicle_type=cfg.vehicle_info.type,
        vehicle_comment=cfg.vehicle_info.comment)
    log.add_channels(*[base.Channel(ch.frequency, ch.name, ch.short_name, ch.units,
                                    ch.values, ch.type)
                       for ch in cfg.channels])
    return log

def from_dict(data):
    return to_logfile(dacite.from_dict(data_class=SessionConfig, data=data,
                                       config=_dacite_config))

def load(fname):
    logger.debug('loading session from %s', fname)
    ext = os.path.splitext(fname)[1].lower()
    with open(fname, 'rt', encoding='utf-8') as f:
        if ext in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return from_dict(data or {})
