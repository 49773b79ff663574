"""campaignlab command-line interface."""
