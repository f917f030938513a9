"""
Client-side state and API access for the parking copilot chat UI.

`store` keeps the minimal signed-in attendee state; `api` talks to the
backend and feeds results into a store.
"""
