"""
Shader source code for OpenGL rendering
"""

# 3-D cube: per-vertex colour, single combined MVP transform
CUBE_VERTEX_SHADER = """
#version 330 core
layout (location = 0) in vec3 aPos;
layout (location = 1) in vec3 aColor;
out vec3 Color;
uniform mat4 mvp;
void main() {
    gl_Position = mvp * vec4(aPos, 1.0);
    Color = aColor;
}
"""

CUBE_FRAGMENT_SHADER = """
#version 330 core
in vec3 Color;
out vec4 FragColor;
void main() { FragColor = vec4(Color, 1.0); }
"""

# 2-D text: one vec4 per vertex packs (x, y, u, v)
TEXT_VERTEX_SHADER = """
#version 330 core
layout (location = 0) in vec4 vertex;
out vec2 TexCoord;
uniform mat4 projection;
void main() {
    gl_Position = projection * vec4(vertex.xy, 0.0, 1.0);
    TexCoord = vertex.zw;
}
"""

# The atlas is single channel: .r is glyph coverage, used as alpha
TEXT_FRAGMENT_SHADER = """
#version 330 core
in vec2 TexCoord;
out vec4 FragColor;
uniform sampler2D atlas;
uniform vec3 textColor;
void main() {
    float alpha = texture(atlas, TexCoord).r;
    FragColor = vec4(textColor, alpha);
}
"""
