import ctypes

import numpy as np

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPainter, QSurfaceFormat
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glClearColor, glClear, GL_COLOR_BUFFER_BIT, GL_DEPTH_BUFFER_BIT,
    glViewport, glEnable, glDisable, GL_DEPTH_TEST,
    glUseProgram, glGetUniformLocation, glUniformMatrix4fv, glUniform3f,
    glGenVertexArrays, glBindVertexArray, glGenBuffers, glBindBuffer,
    glBufferData, GL_ARRAY_BUFFER, GL_DYNAMIC_DRAW, GL_FLOAT, GL_TRUE,
    glEnableVertexAttribArray, glVertexAttribPointer,
    glDrawArrays, GL_LINE_STRIP,
    GL_VERTEX_SHADER, GL_FRAGMENT_SHADER,
)
from OpenGL.GL.shaders import compileProgram, compileShader

from ..core.params import SceneParams
from .camera import Camera
from .raster import SUBTITLE, TITLE


VERT_SHADER = """
#version 330 core
layout (location = 0) in vec3 aPos;
uniform mat4 uMVP;
void main() {
    gl_Position = uMVP * vec4(aPos, 1.0);
}
"""

FRAG_SHADER = """
#version 330 core
out vec4 FragColor;
uniform vec3 uColor;
void main() {
    FragColor = vec4(uColor, 1.0);
}
"""


class GLPreviewWidget(QOpenGLWidget):
    """Draws every row of a wave field as a GL line strip."""

    def __init__(self, scene: SceneParams | None = None, parent=None):
        super().__init__(parent)
        fmt = QSurfaceFormat()
        fmt.setVersion(3, 3)
        fmt.setProfile(QSurfaceFormat.OpenGLContextProfile.CoreProfile)
        fmt.setDepthBufferSize(24)
        self.setFormat(fmt)
        self.scene = scene or SceneParams()
        self.camera = Camera.from_scene(self.scene)
        self._program = None
        self._vao = None
        self._vbo = None
        self._pending = None  # float32 (rows * n, 3)
        self._row_len = 0
        self._row_count = 0
        self.setMinimumSize(320, 240)

    def initializeGL(self):
        bg = [c / 255.0 for c in self.scene.background]
        glClearColor(bg[0], bg[1], bg[2], 1.0)
        self._vao = glGenVertexArrays(1)
        glBindVertexArray(self._vao)
        self._vbo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        glEnableVertexAttribArray(0)
        glVertexAttribPointer(0, 3, GL_FLOAT, False, 12, ctypes.c_void_p(0))
        self._program = compileProgram(
            compileShader(VERT_SHADER, GL_VERTEX_SHADER),
            compileShader(FRAG_SHADER, GL_FRAGMENT_SHADER),
        )
        glBindVertexArray(0)

    def resizeGL(self, w, h):
        glViewport(0, 0, w, h)

    def paintGL(self):
        glEnable(GL_DEPTH_TEST)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        glUseProgram(self._program)
        glBindVertexArray(self._vao)
        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        if self._pending is not None:
            glBufferData(GL_ARRAY_BUFFER, self._pending.nbytes, self._pending, GL_DYNAMIC_DRAW)
            self._pending = None
        mvp = self.camera.mvp(self.width() / max(1, self.height())).astype(np.float32)
        glUniformMatrix4fv(glGetUniformLocation(self._program, 'uMVP'), 1, GL_TRUE, mvp)
        fg = [c / 255.0 for c in self.scene.foreground]
        glUniform3f(glGetUniformLocation(self._program, 'uColor'), fg[0], fg[1], fg[2])
        for i in range(self._row_count):
            glDrawArrays(GL_LINE_STRIP, i * self._row_len, self._row_len)
        glBindVertexArray(0)
        glUseProgram(0)
        glDisable(GL_DEPTH_TEST)
        if self.scene.show_titles:
            self._paint_titles()

    def _paint_titles(self):
        p = QPainter(self)
        p.setPen(QColor(*self.scene.foreground))
        w, h = self.width(), self.height()
        p.setFont(QFont("Helvetica", self.scene.large_font_size))
        p.drawText(int(w * 0.08), int(h * 0.06), int(w * 0.9), int(h * 0.2), Qt.AlignLeft | Qt.AlignTop, TITLE)
        p.setFont(QFont("Helvetica", self.scene.small_font_size))
        p.drawText(int(w * 0.08), int(h * 0.90), int(w * 0.9), int(h * 0.1), Qt.AlignLeft | Qt.AlignTop, SUBTITLE)
        p.end()

    def set_polylines(self, polylines):
        """Queue (x, calm, z) row vertices for the next paint."""
        if not polylines:
            self._row_count = 0
            self.update()
            return
        self._row_len = polylines[0].shape[0]
        self._row_count = len(polylines)
        self._pending = np.ascontiguousarray(np.vstack(polylines), dtype=np.float32)
        self.update()
