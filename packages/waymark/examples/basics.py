"""Hello Route -- the simplest possible waymark program.

Demonstrates:
- Building a Route from major and minor waypoints
- Installing its timing map on a Runtime
- Stepping playback at a fixed frame rate
- Reading time, progress, and position from each RuntimeState

Run: python -m examples.basics
"""

from waymark import Route, Runtime, TimingConfig, Waypoint


def main() -> None:
    print("=== Hello Route ===\n")

    # Two timed segments; the minor waypoint only bends the curve.
    waypoints = [
        Waypoint("start", 0, 0),
        Waypoint("bend", 50, 40, is_major=False),
        Waypoint("middle", 100, 0),
        Waypoint("end", 200, 0),
    ]
    route = Route.build(waypoints, TimingConfig(segment_seconds=1.0))

    # Playback at 4 frames per second.
    runtime = Runtime(fps=4)
    runtime.set_timing_map(route.timing_map)
    runtime.play()

    while runtime.state.is_playing:
        state = runtime.step()
        pos = route.position_at_progress(state.normalized_progress)
        print(
            f"  frame {state.frame}  |  t={state.time:.2f}s  |  "
            f"progress={state.normalized_progress:.3f}  |  ({pos.x:6.1f}, {pos.y:6.1f})"
        )

    print(f"\nDone. {runtime.phase.value} after {runtime.total_frames} frames.")


if __name__ == "__main__":
    main()
