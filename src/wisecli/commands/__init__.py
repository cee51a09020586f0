"""Built-in wise-cli commands, registered on the root app by :mod:`wisecli.app`."""
