# triadchat

The in-memory core of a terminal chat client that has a built-in AI clerk.
It covers the chat log, the input line editor, chat panel scrolling, the
directory of known peers, trust and skill proposals, and the text that the
panels show. Wide characters are measured with `wcwidth`.

## Installation

```
pip install triadchat
```

For development, install the test extra and run the tests:

```
pip install "triadchat[test]"
pytest
```

## Modules

- `triadchat.models`: the value types.
  - Chat messages: `ChatMessage` (with `rendered_text()`), `MessageKind` and
    `SystemMessageType`.
  - Transfer progress: `ProgressState`, which provides `started()` and
    `advance()`.
  - AI settings: `AiMode` (with `parse()`), `AiState` (with `failed()`),
    `AiStatus` and `AiFrequency`.
  - Peers: `PeerInfo`, `PeerReadiness`, `peer_fingerprint()` (a hex SHA-256
    of the user name and node version) and `peer_readiness()`.
  - Skill proposals: `SkillProposal`.
- `triadchat.inputline`: `InputLine` is the editable input buffer.
  - Editing: `write`, `remove`, `remove_previous`, and `move_cursor` with a
    `CursorMovement`.
  - Submission: `reset` returns the text and records it in the history
    unless it is blank.
  - History: `history_prev` and `history_next` walk the history. The text
    typed before browsing began is kept as a draft and restored past the
    newest entry.
  - Screen position: `ui_cursor(width)` gives the cursor's column and row
    when the input wraps at `width` columns.
- `triadchat.viewport`: `estimate_lines()` counts how many panel rows a
  message wraps into. `ChatViewport` keeps the scroll offset. It follows new
  messages until the user scrolls up, and follows them again once the user
  scrolls back to the bottom (`ScrollMovement`).
- `triadchat.peers`: `PeerDirectory` maps endpoints to user names and
  announced `PeerInfo`.
  - When the same user appears at a new endpoint, the old entries are
    dropped.
  - It gives every user name a stable colour id.
  - It answers readiness and fingerprint queries by endpoint or by name.
  - `collect_peer_info()` lists remote peers as `(name, avatar)` pairs,
    sorted by name with one entry per name.
- `triadchat.state`: `State` holds all of the above together, along with the
  following:
  - trusted peer fingerprints;
  - pending skill proposals, numbered from 1, and a pending confirmation;
  - AI mode and status;
  - the room list scroll position;
  - `transcript()` and `recent_human_messages()`;
  - `report_error()`, which accepts an exception, a string, or a list of
    `(endpoint, error)` pairs from a failed broadcast.
- `triadchat.render`:
  - `parse_content()` splits a message into `Span`s, each with a `SpanRole`.
    A leading `/command` and `@mentions` of yourself, of `ops-ai` and of
    other users each get their own role.
  - `progress_bar()` builds a `[###---]` bar.
  - `panel_title()` picks the chat panel title from the AI state.
- `triadchat.status`: text for the AI status panel. It has mode and state
  labels, proposal lines, width-dependent truncation limits, and
  `overflow_line()` for "… +N more" notes.
- `triadchat.layout`: `Length` and `Min` pane constraints for the panel
  splits, `should_show_side_panels()` (80 columns or more) and `truncate()`.
- `triadchat.messages`: localised labels. `messages("ja")` returns Japanese
  labels, and any other language returns English.
- `triadchat.text`: `split_each()` splits text into rows that fit a display
  width. `stringify_sendall_errors()` formats failed sends.

## Example

```python
from triadchat.models import AiMode
from triadchat.render import parse_content
from triadchat.state import State

state = State(local_user_name="alice")
state.ai_mode = AiMode.parse("moderator")
state.add_system_info_message("welcome")
print(state.messages[-1].rendered_text())   # welcome

for span in parse_content("Hi @bob, ask @ops-ai", "alice"):
    print(span.role, repr(span.content))
```

## What this package does not do

It has no command to run and no terminal screen. It produces strings and
spans but draws nothing.

It does no networking. Endpoints are any hashable values you pass in.

It does not call an AI, run skills, or manage rooms. A room is represented
only by the set of member names assigned to `State.active_room_members`.

It writes nothing to disk: there are no transcript files and no saved
configuration.

Terminal input, the network and the AI are for you to connect. You then feed
their events into a `State`.