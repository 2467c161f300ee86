"""Seeking -- random access into playback.

Demonstrates:
- seek_to_frame landing on exactly the state stepping would reach
- seek_to_step jumping to the arrival at a major waypoint
- Pause windows pinning progress while time moves on

Run: python -m examples.seeking
"""

from waymark import PauseMode, Route, Runtime, TimingConfig, Waypoint


def main() -> None:
    print("=== Seeking ===\n")

    waypoints = [Waypoint(f"w{i}", i * 100, 0) for i in range(4)]
    config = TimingConfig(pause_mode=PauseMode.SECONDS, pause_seconds=1.0)
    route = Route.build(waypoints, config)

    runtime = Runtime(fps=25)
    runtime.set_timing_map(route.timing_map)
    print(f"  {runtime.total_frames} frames, {route.timing_map.total_duration:.1f}s\n")

    for frame in (0, 50, 75, 90, 100, runtime.total_frames - 1):
        state = runtime.seek_to_frame(frame)
        print(
            f"  seek_to_frame({frame:3d})  ->  t={state.time:5.2f}s  "
            f"progress={state.normalized_progress:.3f}  step={state.step}"
        )

    print()
    for step in range(len(waypoints)):
        state = runtime.seek_to_step(step)
        pos = route.position_at_progress(state.normalized_progress)
        print(f"  seek_to_step({step})  ->  t={state.time:5.2f}s  at ({pos.x:.0f}, {pos.y:.0f})")


if __name__ == "__main__":
    main()
