"""Low-level terminal access: key codes, cursor control and key-by-key input."""