"""Battle rules: components, events, scenarios, state, queries and movement."""