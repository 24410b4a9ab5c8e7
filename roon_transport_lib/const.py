"""Protocol constants for the transport service."""

from __future__ import annotations

from enum import Enum

SERVICE_NAME = "com.roonlabs.transport:2"

# Reply names
REPLY_SUCCESS = "Success"
REPLY_NETWORK_ERROR = "NetworkError"

# Subscription response tags
RESPONSE_SUBSCRIBED = "Subscribed"
RESPONSE_CHANGED = "Changed"
RESPONSE_UNSUBSCRIBED = "Unsubscribed"

# Subscription topics
TOPIC_ZONES = "zones"
TOPIC_OUTPUTS = "outputs"
TOPIC_QUEUE = "queue"


class PlaybackState(str, Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    LOADING = "loading"
    STOPPED = "stopped"


class MuteHow(str, Enum):
    MUTE = "mute"
    UNMUTE = "unmute"


class VolumeHow(str, Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    RELATIVE_STEP = "relative_step"


class SeekHow(str, Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class Control(str, Enum):
    """Transport controls for a zone.

    PLAYPAUSE starts playback when paused or stopped and pauses it when
    playing or loading. PREVIOUS goes to the start of the current track, or to
    the previous track.
    """

    PLAY = "play"
    PAUSE = "pause"
    PLAYPAUSE = "playpause"
    STOP = "stop"
    PREVIOUS = "previous"
    NEXT = "next"


class LoopMode(str, Enum):
    LOOP = "loop"
    LOOP_ONE = "loop_one"
    DISABLED = "disabled"
    # Only valid in change_settings: cycles to the next mode.
    NEXT = "next"


class SourceControlStatus(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    STANDBY = "standby"
    INDETERMINATE = "indeterminate"


class VolumeType(str, Enum):
    NUMBER = "number"
    DB = "db"
    INCREMENTAL = "incremental"
