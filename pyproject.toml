[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtpmedia"
version = "0.1.0"
description = "RTP packet parsing and H.264/VP8 payload packetizing and depacketizing"
requires-python = ">=3.10"
dependencies = []
keywords = ["rtp", "h264", "vp8", "packetizer", "depacketizer", "video", "streaming"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rtpmedia"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
