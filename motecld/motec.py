
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Writer for MoTeC .ld files.
#
#   +-----------------+ 0
#   | header          |
#   +-----------------+ event_ptr
#   | event           |
#   +-----------------+ venue_ptr
#   | venue           |
#   +-----------------+ vehicle_ptr
#   | vehicle         |
#   +-----------------+ channels_meta_ptr
#   | channel meta 0  |  doubly linked, in channel order
#   | channel meta 1  |
#   | ...             |
#   +-----------------+ channels_data_ptr
#   | channel data 0  |  packed back to back, no padding
#   | channel data 1  |
#   | ...             |
#   +-----------------+
#
# Every pointer is known before the first byte is written, so records
# are simply written at their offsets.

import contextlib
from dataclasses import dataclass
import logging
import os
import tempfile

import numpy as np

from . import datatypes
from . import layout

logger = logging.getLogger(__name__)

CHANNEL_ID_BASE = 0x2EE1

@dataclass(frozen=True)
class Offsets:
    event: int
    venue: int
    vehicle: int
    channels_meta: int
    channels_data: int

    def channel_meta(self, idx):
        return self.channels_meta + layout.CHANNEL_META_SIZE * idx

def compute_offsets(channel_count):
    event = layout.HEADER_SIZE
    venue = event + layout.EVENT_SIZE
    vehicle = venue + layout.VENUE_SIZE
    channels_meta = vehicle + layout.VEHICLE_SIZE
    channels_data = channels_meta + layout.CHANNEL_META_SIZE * channel_count
    return Offsets(event, venue, vehicle, channels_meta, channels_data)

def _encode_samples(channel):
    return np.asarray(channel.values, dtype=channel.elem_type.dtype).tobytes()

def _header(log, offs, channel_count):
    return layout.pack('header', {
        'channels_meta_ptr': offs.channels_meta,
        'channels_data_ptr': offs.channels_data,
        'event_ptr': offs.event,
        'channel_count': channel_count,
        'date': log.time.strftime('%d/%m/%Y'),
        'time': log.time.strftime('%H:%M:%S'),
        'driver': log.driver,
        'vehicle': log.vehicle,
        'venue': log.venue,
        'short_comment': log.short_comment,
    })

def _event(log, offs):
    return layout.pack('event', {
        'name': log.event_name,
        'session': log.event_session,
        'comment': log.event_comment,
        'venue_ptr': offs.venue,
    })

def _venue(log, offs):
    return layout.pack('venue', {
        'name': log.venue,
        'vehicle_ptr': offs.vehicle,
    })

def _vehicle(log):
    return layout.pack('vehicle', {
        'id': log.vehicle_id,
        'weight': log.vehicle_weight,
        'type': log.vehicle_type,
        'comment': log.vehicle_comment,
    })

def _channel_meta(channel, idx, count, offs, data_ptr, dtype):
    return layout.pack('channel', {
        'prev_ptr': offs.channel_meta(idx - 1) if idx > 0 else 0,
        'next_ptr': offs.channel_meta(idx + 1) if idx < count - 1 else 0,
        'data_ptr': data_ptr,
        'data_count': len(channel.values),
        'channel_id': CHANNEL_ID_BASE + idx,
        'data_type': dtype.tag,
        'data_size': dtype.size,
        'frequency': channel.frequency,
        'name': channel.name,
        'short_name': channel.short_name,
        'unit': channel.units,
    })

def _plan(log):
    # Freeze everything up front; nothing read from log after this
    # point, so it can't change under us mid-write.
    channels = tuple(log.channels)
    count = len(channels)
    offs = compute_offsets(count)

    if not 0 <= log.vehicle_weight <= 0xFFFFFFFF:
        raise ValueError('vehicle weight %r does not fit in 32 bits' % (log.vehicle_weight,))

    writes = [(0, _header(log, offs, count)),
              (offs.event, _event(log, offs)),
              (offs.venue, _venue(log, offs)),
              (offs.vehicle, _vehicle(log))]

    data_ptr = offs.channels_data
    for idx, ch in enumerate(channels):
        dtype = datatypes.lookup(ch.elem_type)
        payload = _encode_samples(ch)
        assert len(payload) == dtype.size * len(ch.values)
        writes.append((offs.channel_meta(idx),
                       _channel_meta(ch, idx, count, offs, data_ptr, dtype)))
        writes.append((data_ptr, payload))
        data_ptr += len(payload)

    if data_ptr > 0xFFFFFFFF:
        raise ValueError('channel data ends at %d, past what 32 bit pointers can address' % data_ptr)

    logger.debug('ld layout: %d channels, event %d, venue %d, vehicle %d, meta %d, data %d..%d',
                 count, offs.event, offs.venue, offs.vehicle,
                 offs.channels_meta, offs.channels_data, data_ptr)
    return writes

def write(log, f):
    """Serialize log into the seekable binary file f.

    Each record is written at its absolute offset.  Errors from f
    propagate immediately and leave whatever was written so far."""
    for offset, data in _plan(log):
        f.seek(offset)
        f.write(data)

@contextlib.contextmanager
def atomic_write(fname):
    """Open a temporary file next to fname for binary writing and move
    it over fname only if the block completes."""
    fd, tmp = tempfile.mkstemp(dir=os.path.dirname(os.path.abspath(fname)),
                               prefix=os.path.basename(fname) + '.',
                               suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as f:
            yield f
        os.replace(tmp, fname)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp)
        raise

def save(log, fname):
    with atomic_write(fname) as f:
        write(log, f)
    logger.info('wrote %s with %d channels', fname, len(log.channels))
