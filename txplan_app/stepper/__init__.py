"""
Press-and-hold stepper module.

A bounded integer state machine (Idle, Pressed, Repeating) driven by
cancellable scheduled timers: one step on press, auto-repeat after a hold.
"""
