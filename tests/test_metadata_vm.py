"""Tests for the per-file display projection."""

import json

from app.viewmodels.metadata_vm import MetadataVM


class TestMetadataVM:
    def test_formatted_fields(self, camera_bag, jpeg_file):
        vm = MetadataVM(camera_bag, jpeg_file)
        assert vm.headline == "IMG_0001.jpg"
        assert vm.camera_info.lens == "RF24-70mm F2.8 L IS USM"
        assert [s.label for s in vm.stats] == ["Aperture", "Shutter", "ISO", "Focal Length"]
        assert vm.technical_specs == "8192 x 5464 px • 2.50 MB JPEG"
        assert vm.capture_string == "Taken on Jan 5, 2024, 3:45 PM"
        assert vm.edit_string.startswith("Edited with Adobe Lightroom")
        assert vm.description_info.copyright == "Jane Doe"
        assert vm.has_context is True
        assert [g.title for g in vm.groups] == ["Capture Settings"]

    def test_gps(self, camera_bag):
        vm = MetadataVM(camera_bag)
        assert vm.gps.lng_ref == "W"
        assert len(vm.gps_items) == 3
        assert vm.maps_url.startswith("https://www.google.com/maps/search/?api=1&query=40.71")

    def test_no_gps(self):
        vm = MetadataVM({"Make": "Canon"})
        assert vm.gps is None
        assert vm.gps_items == []
        assert vm.maps_url is None

    def test_ai_data(self, comfy_workflow):
        vm = MetadataVM({"prompt": json.dumps(comfy_workflow)})
        assert vm.ai_data.settings["Sampler"] == "euler"
        assert vm.ai_settings_group.title == "Generation Settings"

    def test_raw_json(self):
        assert json.loads(MetadataVM({"Make": "Canon"}).raw_json) == {"Make": "Canon"}
        assert MetadataVM({}).raw_json == "No metadata found (empty object)"

    def test_empty(self):
        vm = MetadataVM(None)
        assert vm.headline == "Unknown Image"
        assert vm.has_context is False
        assert vm.ai_data is None
        assert vm.ai_settings_group is None
