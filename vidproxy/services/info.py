from vidproxy.models.response import AudioResponse, DownloadResponse, VideoResponse
from vidproxy.services.extractor import YouTubeExtractor
from vidproxy.services.format import file_extension, find_format, quality_text, sort_by_audio_bitrate
from vidproxy.utils.filename import build_filename


class FormatNotFound(LookupError):
    """No format with the requested itag"""


class VideoInfoService:
    """Shape extraction results into endpoint payloads"""

    @staticmethod
    async def video(extractor: YouTubeExtractor, video_id: str) -> VideoResponse:
        info = await extractor.fetch_info(video_id)
        return VideoResponse(
            video=info.details,
            stream=info.streaming_data,
            captions=info.captions,
            formats=info.formats,
        )

    @staticmethod
    async def audio(extractor: YouTubeExtractor, video_id: str) -> AudioResponse:
        info = await extractor.fetch_info(video_id)
        audio_formats = extractor.filter_audio_only(info.formats)
        return AudioResponse(
            audio=sort_by_audio_bitrate(audio_formats),
            videoDetails=info.details,
        )

    @staticmethod
    async def download(
        extractor: YouTubeExtractor,
        video_id: str,
        itag: int,
        media_type: str
    ) -> DownloadResponse:
        """
        Resolve the direct URL of one format.
        Raises FormatNotFound when the itag is not offered for this video.
        """
        info = await extractor.fetch_info(video_id)
        fmt = find_format(info.formats, itag)
        if fmt is None:
            raise FormatNotFound(itag)

        title = info.details["title"]
        return DownloadResponse(
            url=fmt.url,
            filename=build_filename(title, file_extension(fmt, media_type)),
            title=title,
            quality=quality_text(fmt),
            type=media_type,
        )
