
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Record layouts for the MoTeC .ld format.  Each layout is a list of
# (key, struct format) pairs in file order.  Empty keys are reserved
# bytes, always written as zeros.  Offsets are relative to the start
# of the record.

import struct

layouts = {}
formats = {}
sizes = {}

# Values the reader expects but we have no meaning for.
constants = {
    'header': {
        'ld_marker': 0x40,
        'unknown1': 1,
        'unknown2': 0x4240,
        'unknown3': 0xF,
        'device_serial': 0x1F44,
        'device_type': 'ADL',
        'device_version': 420,
        'unknown4': 0xADB0,
        'pro_logging': 0xC81A4,
    },
    'channel': {
        'shift': 0,
        'mul': 1,
        'scale': 1,
        'dec_places': 0,
    },
}

def _define(name, layout):
    layouts[name] = layout
    formats[name] = '<' + ''.join(f for _, f in layout)
    sizes[name] = struct.calcsize(formats[name])

_define('header', [
    #KEY                   FORMAT       OFFSET
    ('ld_marker',          'I'),      # 0
    ('',                   '4x'),     # 4
    ('channels_meta_ptr',  'I'),      # 8
    ('channels_data_ptr',  'I'),      # 12
    ('',                   '20x'),    # 16
    ('event_ptr',          'I'),      # 36
    ('',                   '24x'),    # 40
    ('unknown1',           'H'),      # 64
    ('unknown2',           'H'),      # 66
    ('unknown3',           'H'),      # 68
    ('device_serial',      'I'),      # 70
    ('device_type',        '8s'),     # 74
    ('device_version',     'H'),      # 82
    ('unknown4',           'H'),      # 84
    ('channel_count',      'I'),      # 86
    ('',                   '4x'),     # 90
    ('date',               '16s'),    # 94
    ('',                   '16x'),    # 110
    ('time',               '16s'),    # 126
    ('',                   '16x'),    # 142
    ('driver',             '64s'),    # 158
    ('vehicle',            '64s'),    # 222
    ('',                   '64x'),    # 286
    ('venue',              '64s'),    # 350
    ('',                   '64x'),    # 414
    ('',                   '1024x'),  # 478
    ('pro_logging',        'I'),      # 1502
    ('',                   '66x'),    # 1506
    ('short_comment',      '64s'),    # 1572
    ('',                   '126x'),   # 1636
])

_define('event', [
    ('name',               '64s'),    # 0
    ('session',            '64s'),    # 64
    ('comment',            '1024s'),  # 128
    ('venue_ptr',          'H'),      # 1152  16 bits, unlike the header pointers
])

_define('venue', [
    ('name',               '64s'),    # 0
    ('',                   '1034x'),  # 64
    ('vehicle_ptr',        'H'),      # 1098
])

_define('vehicle', [
    ('id',                 '64s'),    # 0
    ('',                   '128x'),   # 64
    ('weight',             'I'),      # 192   kg
    ('type',               '32s'),    # 196
    ('comment',            '32s'),    # 228
])

_define('channel', [
    ('prev_ptr',           'I'),      # 0     0 for the first channel
    ('next_ptr',           'I'),      # 4     0 for the last channel
    ('data_ptr',           'I'),      # 8
    ('data_count',         'I'),      # 12
    ('channel_id',         'H'),      # 16
    ('data_type',          'H'),      # 18
    ('data_size',          'H'),      # 20
    ('frequency',          'H'),      # 22
    ('shift',              'h'),      # 24
    ('mul',                'h'),      # 26
    ('scale',              'h'),      # 28
    ('dec_places',         'h'),      # 30
    ('name',               '32s'),    # 32
    ('short_name',         '8s'),     # 64
    ('unit',               '12s'),    # 72
    ('',                   '40x'),    # 84
])

HEADER_SIZE = sizes['header']
EVENT_SIZE = sizes['event']
VENUE_SIZE = sizes['venue']
VEHICLE_SIZE = sizes['vehicle']
CHANNEL_META_SIZE = sizes['channel']

def enc_str(s, maxlen):
    """Encode s for a fixed width text field.

    Anything past maxlen bytes is dropped, possibly in the middle of a
    multi-byte character.  Padding is left to struct."""
    if isinstance(s, str):
        s = s.encode('utf-8')
    return bytes(s[:maxlen])

def pack(name, values):
    """Build the bytes for record `name`.

    `values` supplies every named field not found in `constants`.
    Text fields take str or bytes and are truncated to fit."""
    merged = dict(constants.get(name, {}))
    merged.update(values)
    args = []
    for key, fmt in layouts[name]:
        if not key:
            continue
        val = merged[key]
        if fmt.endswith('s'):
            val = enc_str(val, int(fmt[:-1]))
        args.append(val)
    return struct.pack(formats[name], *args)
