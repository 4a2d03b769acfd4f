"""NPC components built from JSON configuration, and their factory registry."""