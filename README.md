# npcbehavior

Building blocks for server-side NPC behaviour, using only the standard library.
NPC state lives in a "board": any mutable mapping (a plain `dict` works) that
components and the decision centre read and write by key.

## What is in it

- `npcbehavior.event`
  - `Vec3`, and `distance(a, b)` on the XZ plane (Y is ignored).
  - `EventTypeConfig` (name, default severity, default TTL, perception mode,
    range), with `EventTypeConfig.from_json(raw)`.
  - `new_event(type_config, position, source_id, severity_override, zone_id)`:
    a positive `severity_override` replaces the type's default; ids are
    `evt_1`, `evt_2`, ...
  - `Bus`: thread-safe list of active events. `publish`, `tick(dt)` (counts TTL
    down and drops events at or below zero), `active()` (a snapshot list) and
    `active_count()`.
- `npcbehavior.decision`
  - `Center(decay_rate).evaluate(board, npc_pos, decision_input, event_types, dt)`
    writes `threat_score`, `need_score`, `emotion_score` and `decision_winner`
    (`"threat"`, `"needs"` or `"emotion"` by `DecisionWeights`). The strongest
    `PerceiveResult` sets `threat_level`, `threat_source`, `last_event_type` and
    `threat_expire_at`; with nothing perceived, `threat_level` decays by
    `decay_rate * dt` down to 0, clearing source and event type at 0.
  - `calc_threat(severity, npc_pos, event_pos, event_range)`: linear fall-off
    with distance.
- `npcbehavior.components`
  - `base`: `Component`, `Tickable`, `Registry` (`register`, `create`, `in`),
    `load_json`, and `ComponentError`.
  - `profile`: identity, position, perception, personality, social and behavior
    components with their factories.
  - `memory`, `movement`, `emotion`, `needs`: tickable components that update
    the board each frame.
  - `defaults.default_registry()`: a registry with all ten factories.
- `npcbehavior.gateway`
  - `hub`: `Connection` (a bounded, closable outbound buffer) and `Hub`, whose
    `run()` processes register, unregister, `broadcast` and
    `broadcast_by_zone` requests in order until `stop()`. A connection whose
    buffer is full on a broadcast is dropped and closed.
  - `router`: `Message`, `Router` (`register`, `dispatch`) and
    `UnknownMessageType`.
- `npcbehavior.experiment`
  - `scenario`: four comparison scenarios (`scenario_distance_trap`,
    `scenario_multi_step_behavior`, `scenario_state_lifecycle`,
    `scenario_civilian_3_events`).
  - `metrics`: `TickRecord`, `ModeResult.calc_metrics`, `response_ticks`,
    `ComparisonReport` (`get`, `format_table`) and `format_mode_detail`.
  - `generator`: `generate_scale_config(n)` builds a pure state-machine
    configuration, a pure behaviour-tree JSON document and a hybrid
    configuration for `n` behaviours, with transition and node counts.

## Install

```
pip install .
pip install ".[test]"   # with the test tools
```

## Example

```python
from npcbehavior.event import Bus, EventTypeConfig, Vec3, new_event
from npcbehavior.components.defaults import default_registry

explosion = EventTypeConfig(name="explosion", default_severity=80,
                            default_ttl=15, perception_mode="auditory", range=500)
bus = Bus()
bus.publish(new_event(explosion, Vec3(100, 0, 0), "bomber_1", 0, ""))
bus.tick(5.0)
print(bus.active_count())   # 1

registry = default_registry()
memory = registry.create(
    "memory", '{"capacity": 10, "memory_types": ["threat"], "decay_time": 60}'
)
print(memory.name())        # memory

board = {}
memory.tick(board, 0.1)
print(board)                # {'memory_count': 0, 'memory_threat_value': 0.0}
```

Unknown component names and invalid configurations raise `ComponentError`;
dispatching an unregistered message type raises `UnknownMessageType`.

## What it does not do

- There is no network server: `Hub` and `Router` work on in-process
  `Connection` objects and `Message` values, and nothing here accepts
  WebSocket or HTTP clients or defines the message handlers.
- There is no state-machine or behaviour-tree engine, no NPC instance or
  scheduler, and no perception filter. `BehaviorComponent` only holds
  references; the generator only produces configurations; scenarios and
  metrics describe and score runs but nothing here executes them.
- Nothing loads configuration files from disk; factories take JSON text,
  bytes or mappings you supply.

## Tests

```
pytest
```