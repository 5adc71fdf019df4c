"""The game object, player and monster turns, text rendering and the terminal front end."""