import re
from typing import Any, Dict, Iterable, List, Optional

from vidproxy.models.internal import FormatDescriptor

_ITAG = re.compile(r'^(\d+)')

# yt-dlp extension -> MIME subtype
_AUDIO_CONTAINERS = {'m4a': 'mp4', 'mp4': 'mp4', 'webm': 'webm', 'mp3': 'mpeg', 'ogg': 'ogg', 'opus': 'ogg'}
_VIDEO_CONTAINERS = {'mp4': 'mp4', 'webm': 'webm', '3gp': '3gpp', 'flv': 'x-flv', 'mkv': 'x-matroska'}


def _codec(value: Optional[str]) -> Optional[str]:
    if not value or value == 'none':
        return None
    return value


def _int_or_none(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return None


class FormatMapper:
    """Translate yt-dlp format entries into FormatDescriptor objects"""

    @staticmethod
    def parse_itag(format_id: Any) -> Optional[int]:
        """Leading integer of a yt-dlp format_id ('140', '251-drc' -> 251)"""
        if format_id is None:
            return None
        match = _ITAG.match(str(format_id))
        return int(match.group(1)) if match else None

    @staticmethod
    def mime_type(ext: Optional[str], video_codec: Optional[str], audio_codec: Optional[str]) -> Optional[str]:
        if not ext:
            return None

        if video_codec:
            kind, subtype = 'video', _VIDEO_CONTAINERS.get(ext, ext)
        else:
            kind, subtype = 'audio', _AUDIO_CONTAINERS.get(ext, ext)

        codecs = ', '.join(c for c in (video_codec, audio_codec) if c)
        if codecs:
            return f'{kind}/{subtype}; codecs="{codecs}"'
        return f'{kind}/{subtype}'

    @staticmethod
    def quality_label(height: Optional[int], fps: Optional[float]) -> Optional[str]:
        if not height:
            return None
        label = f"{height}p"
        if fps and fps > 30:
            label += str(int(round(fps)))
        return label

    @classmethod
    def to_descriptor(cls, fmt: Dict[str, Any]) -> Optional[FormatDescriptor]:
        """
        Build a descriptor from one yt-dlp format dict.
        Returns None for entries that carry neither audio nor video (storyboards).
        """
        video_codec = _codec(fmt.get('vcodec'))
        audio_codec = _codec(fmt.get('acodec'))

        if not video_codec and not audio_codec:
            return None

        ext = fmt.get('ext')
        height = _int_or_none(fmt.get('height')) if video_codec else None
        fps = fmt.get('fps') if video_codec else None
        tbr = fmt.get('tbr')

        return FormatDescriptor(
            itag=cls.parse_itag(fmt.get('format_id')),
            url=fmt.get('url'),
            mimeType=cls.mime_type(ext, video_codec, audio_codec),
            container=ext,
            codecs=', '.join(c for c in (video_codec, audio_codec) if c),
            videoCodec=video_codec,
            audioCodec=audio_codec,
            qualityLabel=cls.quality_label(height, fps),
            bitrate=_int_or_none(tbr * 1000) if tbr else None,
            audioBitrate=_int_or_none(fmt.get('abr')) if audio_codec else None,
            width=_int_or_none(fmt.get('width')) if video_codec else None,
            height=height,
            fps=fps,
            contentLength=_int_or_none(fmt.get('filesize') or fmt.get('filesize_approx')),
            hasVideo=video_codec is not None,
            hasAudio=audio_codec is not None,
            isHLS=str(fmt.get('protocol') or '').startswith('m3u8'),
        )

    @classmethod
    def map_formats(cls, formats: Iterable[Dict[str, Any]]) -> List[FormatDescriptor]:
        descriptors = []
        for fmt in formats:
            descriptor = cls.to_descriptor(fmt)
            if descriptor is not None:
                descriptors.append(descriptor)
        return descriptors


def sort_by_audio_bitrate(formats: Iterable[FormatDescriptor]) -> List[FormatDescriptor]:
    """Highest audio bitrate first; missing bitrate counts as 0. Stable."""
    return sorted(formats, key=lambda f: f.audioBitrate or 0, reverse=True)


def find_format(formats: Iterable[FormatDescriptor], itag: int) -> Optional[FormatDescriptor]:
    return next((f for f in formats if f.itag == itag), None)


def file_extension(fmt: FormatDescriptor, media_type: str) -> str:
    """m4a/webm for audio downloads, mp4/webm for everything else"""
    is_mp4 = 'mp4' in (fmt.mimeType or '')
    if media_type == 'audio':
        return 'm4a' if is_mp4 else 'webm'
    return 'mp4' if is_mp4 else 'webm'


def quality_text(fmt: FormatDescriptor) -> str:
    return fmt.qualityLabel or f"{fmt.audioBitrate or 0}kbps"
