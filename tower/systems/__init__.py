"""Event-driven game systems: combat, game state, map, UI messages and their registry."""