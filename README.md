# voda

Building blocks for an exchange-diary service. Members join diary rooms and
take turns writing. The package models rooms and whose turn it is, builds
alarms and scheduled-task payloads, defines the database tables, and has
clients for push messaging, task queues, object storage and the Kakao
user-info API.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `voda.domain.room`: `Room`, `new_room`, `period_to_duration` and
  `RoomError`. A room holds at most ten people, the master included
  (`is_member_full`). `next_turn` moves the turn round the `orders` list.
  `remove_member` and `change_master` raise `RoomError` when the rules are
  broken.
- `voda.domain.entities`: `Member`, `MemberDevice`, `RoomMember`, `Alarm`,
  `AuthCodeClaims`, `Token`, `RoomMemberOrderBy` and their `new_*` builders.
  `new_alarm` picks the alarm title for a `TaskCode`. It raises `ValueError`
  for `ROOM_PERIOD_FIN` and for unknown codes.
- `voda.domain.vo`: `TaskCode` and `TaskVO`. `TaskVO.encode()` gives the
  newline-terminated JSON body of a task request.
- `voda.domain.utils`: `contains`, `remove`, `current_datetime`, `getenv`.
- `voda.services.token_verifier`: `TokenVerifier.verify` accepts
  HMAC-signed (HS256/384/512) tokens and returns their `AuthCodeClaims`. It
  raises `TokenError` for bad or expired tokens.
- `voda.persistence.models`: SQLAlchemy tables `MemberModel`, `RoomModel`,
  `RoomMemberModel`, `MemberDeviceModel` and `AlarmModel` on `Base`.
- `voda.persistence.database`: `dev_dsn`, `sandbox_dsn`, `prod_dsn`,
  `connect_database(phase, cfg)` and `migrate(engine)`.
- `voda.config`: `load(path, phase=None)` reads `<path>/<phase>.yaml`. The
  phase defaults to `$PHASE`, then `dev`.
- `voda.logger`: `build_logger(phase)` and `info`, `debug`, `error`, which
  take keyword arguments as structured fields. The `prod` phase writes JSON
  at info level. Other phases write coloured console lines at debug level.
- `voda.clients.push`: `PushClient.push` sends an `Alarm` to device tokens
  through a `Messenger` and returns the tokens that failed.
- `voda.clients.tasks`: `TaskClient` builds, registers, replaces, reads and
  deletes `Task`s on a queue through a `TaskBackend`.
- `voda.clients.storage`: `StorageClient`, `StorageBucket` and `StorageItem`
  work over an `ObjectStore`.
- `voda.clients.kakao`: `KakaoClient.get_user_info()` returns a `KakaoUser`.

## Examples

Turns and due times:

```python
from voda.domain.room import new_room

room = new_room(master_id=1, name="Our diary", code="1234",
                hint="numbers", theme="blue", period=3)
room.append_member(2)
room.append_member(3)

room.next_turn()      # 2
room.next_turn()      # 3
room.next_turn()      # back to 1
room.next_due_at()    # due_at plus three days
```

Task payloads:

```python
from voda.domain.vo import TaskCode, TaskVO

TaskVO(1, "someone@example.com", TaskCode.MEMBER_ON_DUTY).encode()
# b'{"RoomID":1,"Email":"someone@example.com","Code":"MEMBER_ON_DUTY"}\n'
```

Configuration file (`configs/dev.yaml`):

```yaml
db-config:
  host: localhost
  port: 3306
  user: user
  name: voda
  password: password
client:
  kakao:
    base-url: https://kapi.example.com
    oauth:
      client-id: placeholder
      client-secret: secret
      redirect-url: http://localhost:8080/callback
```

```python
from voda.config import load
from voda.persistence.database import connect_database, migrate

config = load("./configs", "dev")
engine = connect_database("dev", config.db_config)
migrate(engine)
```

`connect_database` opens a `mysql+pymysql` engine and checks it with
`SELECT 1`. The `prod` phase connects through the Unix socket
`$DB_SOCKET_DIR/<host>`, with `/cloudsql` as the default directory. The
PyMySQL driver is not installed with this package. Install it yourself to
connect to MySQL.

## What the package does not do

- It defines the tables but has no repository layer that reads or writes
  them, and no services that manage members, rooms, memberships, alarms,
  scheduled tasks or file uploads on top of them.
- It has no HTTP server and no command-line entry point.
- The push, task-queue and storage clients need a backend that you supply.
  Implement `Messenger`, `TaskBackend` or `ObjectStore`. No cloud service
  implementation is included.