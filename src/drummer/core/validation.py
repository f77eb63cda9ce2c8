import os
import re

ACCEPTED_AUDIO_EXT = ".mp3"

YOUTUBE_URL_RE = re.compile(
    r"(https?://)?(www\.|m\.)?"
    r"(youtube\.com/watch\?([^#\s]*&)?v=[\w-]{6,}|youtube\.com/shorts/[\w-]{6,}|youtu\.be/[\w-]{6,})"
    r"([?&#]\S*)?",
    re.IGNORECASE,
)


def is_accepted_audio_file(file_name: str) -> bool:
    return os.path.basename(file_name or "").lower().endswith(ACCEPTED_AUDIO_EXT)


def is_remote_video_url(url: str) -> bool:
    """
    True for youtube watch / shorts / youtu.be links, http or https,
    with or without the scheme and a www. / m. prefix.
    """
    url = (url or "").strip()
    if not url:
        return False
    return YOUTUBE_URL_RE.fullmatch(url) is not None
