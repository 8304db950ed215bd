"""
Tests for yt-dlp and ffmpeg command generation.
"""

from tubescout.utils.commands import (
    build_ffmpeg_command,
    build_ffmpeg_commands,
    build_ytdlp_command,
    safe_title,
)

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_ytdlp_default_1080p():
    assert build_ytdlp_command(URL) == (
        'yt-dlp -f "bv*[height<=1080]+ba/b[height<=1080]" --merge-output-format mp4 '
        f'-o "%(title)s.%(ext)s" "{URL}"'
    )


def test_ytdlp_best_quality_mkv():
    command = build_ytdlp_command(URL, quality="best", fmt="mkv")
    assert '-f "bv*+ba/b" --merge-output-format mkv' in command


def test_ytdlp_audio_only_with_filename():
    command = build_ytdlp_command(URL, audio_only=True, filename="song")
    assert command == f'yt-dlp -f bestaudio -x --audio-format mp3 -o "song.mp3" "{URL}"'


def test_ytdlp_filename_with_extension_kept():
    command = build_ytdlp_command(URL, fmt="webm", filename="clip.mkv")
    assert '-o "clip.mkv"' in command


def test_ytdlp_filename_gets_format_extension():
    assert '-o "clip.webm"' in build_ytdlp_command(URL, fmt="webm", filename=" clip ")


def test_ytdlp_blank_url():
    assert build_ytdlp_command("   ") is None


def test_safe_title_strips_path_characters():
    name = safe_title('AC/DC: "Live" <2024> | Best?*')
    for char in '/\\:"<>|?*':
        assert char not in name


def test_ffmpeg_command():
    assert build_ffmpeg_command("https://fictional-stream-link.com/x", "My Video") == (
        'ffmpeg -i "https://fictional-stream-link.com/x" -c copy "My Video.mp4"'
    )


def test_ffmpeg_commands_are_numbered():
    commands = build_ffmpeg_commands(
        ["https://fictional-stream-link.com/a", "  https://fictional-stream-link.com/b"], "My Video"
    ).split("\n")

    assert commands == [
        'ffmpeg -i "https://fictional-stream-link.com/a" -c copy "My Video_1.mp4"',
        'ffmpeg -i "https://fictional-stream-link.com/b" -c copy "My Video_2.mp4"',
    ]
