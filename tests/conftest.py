"""Shared test fixtures: decoder-shaped tag bags and file descriptions."""

import pytest

from core.models import FileInfo


@pytest.fixture
def camera_bag():
    """A typical JPEG bag as a browser-side EXIF decoder would produce it."""
    return {
        "Make": {"value": "Canon", "description": "Canon"},
        "Model": {"value": "Canon EOS R5", "description": "Canon EOS R5"},
        "LensModel": {"value": "RF24-70mm F2.8 L IS USM", "description": "RF24-70mm F2.8 L IS USM"},
        "FNumber": {"value": [28, 10], "description": "2.8"},
        "ExposureTime": {"value": [1, 125], "description": "1/125"},
        "ISOSpeedRatings": {"value": 400, "description": "400"},
        "FocalLength": {"value": [50, 1], "description": "50 mm"},
        "PixelXDimension": {"value": 8192, "description": "8192"},
        "PixelYDimension": {"value": 5464, "description": "5464"},
        "DateTimeOriginal": {"value": ["2024:01:05 15:45:00"], "description": "2024:01:05 15:45:00"},
        "Software": {"value": ["Adobe Lightroom"], "description": "Adobe Lightroom"},
        "ModifyDate": {"value": "2024-02-10T09:05:00", "description": "2024-02-10T09:05:00"},
        "MeteringMode": {"value": 5, "description": "Pattern"},
        "Flash": {"value": 16, "description": "Flash did not fire, compulsory flash mode"},
        "WhiteBalance": {"value": 0, "description": "Auto white balance"},
        "ExposureProgram": {"value": 3, "description": "Unknown"},
        "Copyright": {"value": ["Jane Doe"], "description": "Jane Doe"},
        "Artist": {"value": ["Jane Doe"], "description": "Jane Doe"},
        "GPSLatitude": {"value": [[40, 1], [42, 1], [46, 1]], "description": "40.7128"},
        "GPSLatitudeRef": {"value": ["N"], "description": "North latitude"},
        "GPSLongitude": {"value": [[74, 1], [0, 1], [21, 1]], "description": "74.0059"},
        "GPSLongitudeRef": {"value": ["W"], "description": "West longitude"},
        "GPSAltitude": {"value": [105, 10], "description": "10.5 m"},
    }


@pytest.fixture
def jpeg_file():
    return FileInfo(name="IMG_0001.jpg", size=2 * 1024 * 1024 + 512 * 1024, type="image/jpeg")


@pytest.fixture
def a1111_text():
    return (
        "masterpiece, a cat sitting on a windowsill\n"
        "Negative prompt: blurry, lowres\n"
        "Steps: 20, Sampler: Euler a, CFG scale: 7, Seed: 1234, Size: 512x768, "
        "Model: sd15.safetensors"
    )


@pytest.fixture
def comfy_workflow():
    return {
        "3": {
            "inputs": {
                "seed": 156680208700286,
                "steps": 20,
                "cfg": 8.0,
                "sampler_name": "euler",
                "scheduler": "normal",
                "denoise": 1.0,
                "model": ["4", 0],
                "positive": ["6", 0],
                "negative": ["7", 0],
                "latent_image": ["5", 0],
            },
            "class_type": "KSampler",
            "_meta": {"title": "KSampler"},
        },
        "4": {
            "inputs": {"ckpt_name": "v1-5-pruned-emaonly.safetensors"},
            "class_type": "CheckpointLoaderSimple",
            "_meta": {"title": "Load Checkpoint"},
        },
        "5": {
            "inputs": {"width": 512, "height": 512, "batch_size": 1},
            "class_type": "EmptyLatentImage",
            "_meta": {"title": "Empty Latent Image"},
        },
        "6": {
            "inputs": {"text": "beautiful scenery nature glass bottle", "clip": ["4", 1]},
            "class_type": "CLIPTextEncode",
            "_meta": {"title": "CLIP Text Encode (Prompt)"},
        },
        "7": {
            "inputs": {"text": "text, watermark", "clip": ["4", 1]},
            "class_type": "CLIPTextEncode",
            "_meta": {"title": "CLIP Text Encode (Prompt)"},
        },
    }
