"""
Background modeling utilities for wave detection.

Frames are downsized to the analysis resolution, passed through a
Mixture-of-Gaussians background subtractor, and cleaned with a morphological
opening to produce the binary foreground mask the tracker consumes.
"""

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class BackgroundModel:
    """
    Produces binary foreground masks from raw video frames.

    The subtractor is created lazily on the first frame so a model can be
    configured before the video is opened.
    """

    def __init__(self, params):
        """
        Initialize background model.

        Args:
            params (dict): Tracking parameters
        """
        self.params = params
        self.subtractor = None
        self.kernel = cv2.getStructuringElement(
            cv2.MORPH_RECT, (params["MORPH_KERNEL_SIZE"], params["MORPH_KERNEL_SIZE"])
        )

    def reset(self):
        """Discard the learned background."""
        self.subtractor = None

    def _create_subtractor(self):
        logger.info(
            f"Initializing Mixture-of-Gaussians background model "
            f"(history={self.params['MOG_HISTORY']})"
        )
        return cv2.createBackgroundSubtractorMOG2(
            history=self.params["MOG_HISTORY"],
            varThreshold=self.params["MOG_VAR_THRESHOLD"],
            detectShadows=False,
        )

    def resize_frame(self, frame):
        """Resize a frame to the analysis resolution."""
        size = (self.params["ANALYSIS_WIDTH"], self.params["ANALYSIS_HEIGHT"])
        if frame.shape[1::-1] == size:
            return frame
        return cv2.resize(frame, size, interpolation=cv2.INTER_LINEAR)

    def generate_foreground_mask(self, frame):
        """
        Apply the background subtractor and binarize its output.

        Args:
            frame (np.ndarray): Frame at analysis resolution

        Returns:
            np.ndarray: uint8 mask with foreground pixels set to 255
        """
        if self.subtractor is None:
            self.subtractor = self._create_subtractor()
        fg = self.subtractor.apply(frame)
        _, fg_mask = cv2.threshold(fg, 127, 255, cv2.THRESH_BINARY)
        return fg_mask

    def apply_morphological_operations(self, mask):
        """Remove speckle noise with a morphological opening."""
        return cv2.morphologyEx(mask, cv2.MORPH_OPEN, self.kernel)

    def preprocess(self, frame):
        """
        Turn a raw video frame into a cleaned binary foreground mask.

        Args:
            frame (np.ndarray): BGR or grayscale frame of any size; color
                frames are modeled in color

        Returns:
            np.ndarray: (ANALYSIS_HEIGHT, ANALYSIS_WIDTH) uint8 binary mask
        """
        resized = self.resize_frame(frame)
        mask = self.generate_foreground_mask(resized)
        return np.ascontiguousarray(self.apply_morphological_operations(mask))
