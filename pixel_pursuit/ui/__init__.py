"""pygame front end. Thin adapters over `pixel_pursuit.gameplay`."""
