import unittest
from unittest.mock import MagicMock
import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from PIL import Image

from iconmaker.errors import DuplicateSizeError, InvalidSizeError, MissingImageError
from iconmaker.models.icon_image import CanonicalImage
from iconmaker.models.image_set import ImageSet


def solid(size, rgba=(255, 0, 0, 255), height=None):
    return Image.new("RGBA", (size, height or size), rgba)


class TestImageSet(unittest.TestCase):

    def setUp(self):
        self.images = ImageSet()

    def test_add_then_iterate_yields_image_at_its_size(self):
        self.images.add(solid(48))
        pairs = self.images.iterate_ascending()
        self.assertEqual(len(pairs), 1)
        size, image = pairs[0]
        self.assertEqual(size, 48)
        self.assertIsInstance(image, CanonicalImage)
        self.assertEqual(image.size, 48)

    def test_sizes_ascend_regardless_of_insertion_order(self):
        for size in (256, 16, 128, 32, 64):
            self.images.add(solid(size))
        self.assertEqual([s for s, _ in self.images.iterate_ascending()], [16, 32, 64, 128, 256])
        self.assertEqual([img.size for img in self.images], [16, 32, 64, 128, 256])

    def test_add_duplicate_size_fails(self):
        self.images.add(solid(32))
        with self.assertRaises(DuplicateSizeError):
            self.images.add(solid(32, (0, 255, 0, 255)))
        # original left untouched
        self.assertEqual(self.images.get(32), CanonicalImage.from_pil(solid(32)))

    def test_set_duplicate_size_overwrites(self):
        self.images.add(solid(32))
        green = solid(32, (0, 255, 0, 255))
        self.assertTrue(self.images.set(green))
        self.assertEqual(len(self.images), 1)
        self.assertEqual(self.images.get(32), CanonicalImage.from_pil(green))

    def test_invalid_sizes_rejected(self):
        for image in (solid(15), solid(257), solid(32, height=16)):
            with self.assertRaises(InvalidSizeError):
                self.images.add(image)
            with self.assertRaises(InvalidSizeError):
                self.images.set(image)
        self.assertEqual(len(self.images), 0)

    def test_bounds_are_inclusive(self):
        self.images.add(solid(16))
        self.images.add(solid(256))
        self.assertEqual(self.images.sizes(), (16, 256))

    def test_none_rejected(self):
        with self.assertRaises(MissingImageError):
            self.images.add(None)
        with self.assertRaises(MissingImageError):
            self.images.set(None)

    def test_accepts_other_pixel_formats(self):
        self.images.add(Image.new("RGB", (24, 24), (10, 20, 30)))
        self.images.add(Image.new("L", (40, 40), 200))
        pixels = self.images.get(24).as_array()
        self.assertEqual(tuple(pixels[0, 0]), (30, 20, 10, 255))
        self.assertEqual(tuple(self.images.get(40).as_array()[5, 5]), (200, 200, 200, 255))

    def test_remove_reports_whether_removed(self):
        self.images.add(solid(32))
        self.assertTrue(self.images.remove(32))
        self.assertFalse(self.images.remove(32))
        self.assertFalse(self.images.remove(999))
        self.assertNotIn(32, self.images)

    def test_clear(self):
        self.images.add(solid(16))
        self.images.add(solid(32))
        self.images.clear()
        self.assertEqual(len(self.images), 0)
        self.assertEqual(self.images.iterate_ascending(), ())

    def test_snapshot_not_affected_by_later_mutation(self):
        self.images.add(solid(16))
        snapshot = self.images.iterate_ascending()
        self.images.add(solid(32))
        self.images.remove(16)
        self.assertEqual([s for s, _ in snapshot], [16])
        # restartable
        self.assertEqual(list(snapshot), list(snapshot))

    def test_notifications_on_membership_change(self):
        observer = MagicMock()
        self.images.subscribe(observer)
        self.images.add(solid(16))
        self.images.set(solid(16, (0, 0, 255, 255)))
        self.images.remove(16)
        self.images.remove(16)
        self.images.clear()
        self.assertEqual(observer.call_count, 3)
        observer.assert_called_with(self.images)

    def test_set_with_identical_content_is_noop(self):
        observer = MagicMock()
        self.images.set(solid(32))
        self.images.subscribe(observer)
        self.assertFalse(self.images.set(solid(32)))
        observer.assert_not_called()

    def test_failed_validation_does_not_notify(self):
        observer = MagicMock()
        self.images.subscribe(observer)
        with self.assertRaises(InvalidSizeError):
            self.images.add(solid(8))
        observer.assert_not_called()

    def test_observer_failure_does_not_affect_mutation(self):
        failing = MagicMock(side_effect=RuntimeError("boom"))
        after = MagicMock()
        self.images.subscribe(failing)
        self.images.subscribe(after)
        with self.assertLogs("iconmaker.models.image_set", level="ERROR"):
            self.images.add(solid(64))
        self.assertIn(64, self.images)
        after.assert_called_once_with(self.images)

    def test_mutations_are_logged(self):
        with self.assertLogs("iconmaker.models.image_set", level="DEBUG") as logs:
            self.images.add(solid(16))
            self.images.remove(16)
        self.assertIn("Добавлено изображение 16x16", logs.output[0])
        self.assertIn("Удалено изображение 16x16", logs.output[1])

    def test_unsubscribe(self):
        observer = MagicMock()
        self.images.subscribe(observer)
        self.images.unsubscribe(observer)
        self.images.add(solid(16))
        observer.assert_not_called()


if __name__ == '__main__':
    unittest.main()
