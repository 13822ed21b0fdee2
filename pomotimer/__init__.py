"""PomoTimer: a Pomodoro work/break interval timer."""
