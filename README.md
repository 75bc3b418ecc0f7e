# dsfapi

Python data types for the JSON protocol of the Duet Software Framework (DSF)
control server: the messages that set up a connection, the commands a client
sends, the responses it gets back, parsed G/M/T-code parameters and the
kinematics section of the object model.

The package uses only the standard library.

```
pip install dsfapi
```

## What it does not do

This package builds and reads the protocol's messages; it does not talk to the
server. There is no socket handling, no command, intercept or subscribe
connection, no parsed representation of a whole G/M/T-code (only of its
parameters) and no listener for custom HTTP endpoints. To use the messages,
open the UNIX socket yourself (by default `/run/dsf/dcs.sock`), write the JSON
of `to_dict()` results and decode replies with the `from_dict()` methods.

## Modules

### `dsfapi.types`

- `CodeChannel` – input channels (`HTTP`, `TELNET`, `FILE`, `USB`, `AUX`,
  `TRIGGER`, `QUEUE`, `LCD`, `SBC`, `DAEMON`, `AUX2`, `AUTO_PAUSE`,
  `UNKNOWN`); `DEFAULT_CHANNEL` is `CodeChannel.SBC` and `all_channels()`
  returns them all in order.
- `SbcPermissions` – permissions an SBC plugin may request.
- `DriverId` – a board and port pair.

```python
from dsfapi.types import DriverId

d = DriverId.parse("1.2")        # DriverId(board=1, port=2)
d.as_uint64()                    # 65538
DriverId.from_uint64(65538) == d # True
str(d)                           # "1.2"
```

`DriverId.parse` raises `ValueError` for text that is not `port` or
`board.port`; blank text gives `DriverId(0, 0)`.

### `dsfapi.model`

- `MessageType` (`SUCCESS`, `WARNING`, `ERROR`) and `Message`. `str(message)`
  gives `"Error: ..."`, `"Warning: ..."` or the bare content.
  `Message.from_dict` / `to_dict` convert to and from the wire form.
- `HttpEndpointType`, `AccessLevel`, `SessionType`.
- `Thumbnail` and `ParsedFileInfo`, built with `from_dict` from the result of
  a file-info request.

### `dsfapi.initmessages`

- `ServerInitMessage.from_dict(data)` reads the server's greeting;
  `is_compatible()` is true when its version is at least `PROTOCOL_VERSION`
  (10).
- `command_init_message()` returns the `ClientInitMessage` that enters command
  mode.
- `InterceptInitMessage(interception_mode=..., channels=..., filters=...,
  priority_codes=...)` and `SubscribeInitMessage(subscription_mode=...,
  filters=...)` enter interception and subscription mode.
- `ConnectionMode`, `InterceptionMode`, `SubscriptionMode`.

```python
from dsfapi.initmessages import SubscribeInitMessage, SubscriptionMode

SubscribeInitMessage(subscription_mode=SubscriptionMode.PATCH, filters=["heat/**"]).to_dict()
# {"Mode": "Subscribe", "Version": 10, "SubscriptionMode": "Patch",
#  "Filter": "", "Filters": ["heat/**"]}
```

### `dsfapi.commands`

Every command is a dataclass derived from `Command`; `to_dict()` gives the
wire form with capitalised keys and enums written as their values.

```python
from dsfapi.commands import Response, SimpleCode
from dsfapi.types import CodeChannel

SimpleCode(code="M115", channel=CodeChannel.SBC).to_dict()
# {"Command": "SimpleCode", "Code": "M115", "Channel": "SBC"}

reply = Response.from_dict({"success": True, "result": "ok"})
reply.success, reply.result   # (True, "ok")
```

Commands without members come from factories: `cancel()`, `ignore()`,
`acknowledge()`, `get_object_model()`, `sync_object_model()`,
`lock_object_model()`, `unlock_object_model()`. Others are `Resolve`,
`GetFileInfo`, `ResolvePath`, `EvaluateExpression`, `Flush`,
`SetUpdateStatus`, `SimpleCode`, `WriteMessage`, `SetObjectModel`,
`PatchObjectModel`, `InstallPlugin`, `SetPluginData`, `AddUserSession`,
`RemoveUserSession`, the plugin factories `start_plugin`, `stop_plugin`,
`uninstall_plugin` and the endpoint factories `add_http_endpoint`,
`remove_http_endpoint`.

For custom HTTP endpoints, `ReceivedHttpRequest.from_dict` reads a forwarded
request and `SendHttpResponse(status_code, response, response_type)` with an
`HttpResponseType` builds the answer; a status code outside 0–65535 raises
`ValueError`.

### `dsfapi.codeparameter`

`CodeParameter(letter, value, is_string=False, is_driver_id=False)` parses its
text into an integer, float, list of numbers, driver ID or list of driver IDs;
text in braces is marked as an expression.

```python
from dsfapi.codeparameter import CodeParameter

CodeParameter("S", "12.5").as_float()                 # 12.5
CodeParameter("P", "1:2:3").as_int_list()             # [1, 2, 3]
CodeParameter("P", "0.1:0.2", is_driver_id=True).as_driver_id_list()
# [DriverId(board=0, port=1), DriverId(board=0, port=2)]
str(CodeParameter("@", "hello", is_string=True))      # '"hello"'
```

The `as_float`, `as_int`, `as_uint`, `as_driver_id`, `as_bool`,
`as_float_list`, `as_int_list`, `as_uint_list` and `as_driver_id_list`
methods raise `CodeParameterError` when the value cannot be converted.
`CodeParameter.simple(letter, value)` wraps an already native value,
`clone()` copies a parameter and `to_dict` / `from_dict` use the wire form
(`letter`, `value`, `isString`, `isDriverId`). `MissingParameterError`
(message "Parameter not found") is available for callers that require a
parameter.

### `dsfapi.kinematics`

The object model's kinematics entry is a plain dictionary. These functions
turn it into typed dataclasses, raising `ValueError` if the kinematics are of
another kind:

```python
from dsfapi.kinematics import as_core_kinematics

k = as_core_kinematics({"name": "coreXY"})
k.forward_matrix   # identity matrix
k.to_dict()        # camelCase dictionary again
```

`as_base_kinematics`, `as_zleadscrew_kinematics`, `as_core_kinematics`,
`as_delta_kinematics`, `as_hangprinter_kinematics`, `as_scara_kinematics` and
`kinematics_name` cover the kinds listed in `KinematicsName`.