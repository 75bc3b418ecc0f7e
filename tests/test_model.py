from datetime import datetime, timezone

import pytest

from dsfapi.model import (
    AccessLevel,
    HttpEndpointType,
    Message,
    MessageType,
    ParsedFileInfo,
    SessionType,
    Thumbnail,
)


def test_message_str_error():
    assert str(Message(type=MessageType.ERROR, content="boom")) == "Error: boom"


def test_message_str_warning():
    assert str(Message(type=MessageType.WARNING, content="hot")) == "Warning: hot"


def test_message_str_success_is_content():
    assert str(Message(type=MessageType.SUCCESS, content="done")) == "done"


def test_message_round_trip():
    stamp = datetime(2021, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)
    original = Message(type=MessageType.WARNING, content="x", time=stamp)
    restored = Message.from_dict(original.to_dict())
    assert restored == original


def test_message_from_dict_with_z_and_nanoseconds():
    message = Message.from_dict(
        {"time": "2020-01-02T03:04:05.123456789Z", "type": 2, "content": "c"}
    )
    assert message.type is MessageType.ERROR
    assert message.content == "c"
    assert message.time.tzinfo is not None
    assert message.time.utcoffset().total_seconds() == 0
    assert (message.time.year, message.time.second) == (2020, 5)


def test_message_from_dict_rejects_unknown_type():
    with pytest.raises(ValueError):
        Message.from_dict({"type": 7, "content": ""})


def test_message_to_dict_type_is_int():
    data = Message(type=MessageType.ERROR, content="e").to_dict()
    assert data["type"] == int(MessageType.ERROR)
    assert data["content"] == "e"


def test_enum_wire_values():
    assert HttpEndpointType("WebSocket") is HttpEndpointType.WEBSOCKET
    assert AccessLevel("readWrite") is AccessLevel.READ_WRITE
    assert SessionType("telnet") is SessionType.TELNET


def test_thumbnail_from_dict():
    thumb = Thumbnail.from_dict({"encodedImage": "abc", "height": 32, "width": 48})
    assert thumb == Thumbnail(encoded_image="abc", height=32, width=48)


def test_parsed_file_info_from_dict():
    info = ParsedFileInfo.from_dict(
        {
            "filament": [100.5, 20],
            "fileName": "0:/gcodes/part.gcode",
            "firstLayerHeight": 0.3,
            "generatedBy": "slicer",
            "height": 12.5,
            "lastModified": "2020-06-01T10:00:00Z",
            "layerHeight": 0.2,
            "numLayers": 60,
            "printTime": 3600,
            "simulatedTime": None,
            "size": 4096,
            "thumbnails": [{"encodedImage": "img", "height": 1, "width": 2}],
        }
    )
    assert info.filament == [100.5, 20.0]
    assert info.file_name == "0:/gcodes/part.gcode"
    assert info.generated_by == "slicer"
    assert info.num_layers == 60
    assert info.print_time == 3600
    assert info.simulated_time is None
    assert info.size == 4096
    assert info.last_modified.month == 6
    assert info.thumbnails == [Thumbnail(encoded_image="img", height=1, width=2)]


def test_parsed_file_info_defaults_for_missing_and_null():
    info = ParsedFileInfo.from_dict({"filament": None, "thumbnails": None})
    assert info == ParsedFileInfo()
    assert info.last_modified is None