import os
import logging
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30
MAX_FPS = 60


def surface_to_bgr(surface: pygame.Surface) -> np.ndarray:
    # array3d is (width, height, 3) RGB; OpenCV wants (height, width, 3) BGR
    view = pygame.surfarray.array3d(surface)
    frame = np.ascontiguousarray(np.transpose(view, (1, 0, 2)))
    return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)


def fps_for_step(step_time_ms: float) -> int:
    """Frame rate that plays one walk step per frame at animation speed."""
    if step_time_ms <= 0:
        return MAX_FPS
    return max(1, min(MAX_FPS, round(1000 / step_time_ms)))


class VideoRecorder:
    """
    Writes every rendered maze frame to an mp4. With no output file given,
    one is named '<prefix>_<timestamp>.mp4', under recordings/ if present.
    """

    def __init__(self, active=False, output_file=None, fps=DEFAULT_FPS, prefix="maze_carve"):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.prefix = prefix
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            fname = f"{prefix}_{ts}.mp4"

            if os.path.isdir("recordings"):
                self.output_file = os.path.join("recordings", fname)
            else:
                self.output_file = fname

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        # Writer is sized by the first frame
        if self.writer is None:
            self.frame_size = surface.get_size()
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file} at {self.fps} fps")

        self.writer.write(surface_to_bgr(surface))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames, {self.frame_count / self.fps:.1f}s)")
            self.writer = None
