"""
GLSL SDK - Test Configuration
=============================

Shared fixtures: a realistic shader written flush-left, and the same
shader as the indentation engine should lay it out.
"""

import pytest


RAW_SHADER = """\
#version 330 core
// Blur shader
layout(location = 0) out vec4 color;
uniform sampler2D tex;

/* Gaussian
* weights
*/
const float weights[3] = float[](
0.25,
0.5,
0.25
);

void main()
{
vec4 sum = vec4(0.0);
for (int i = 0; i < 3; i++) {
sum += texture(tex, vec2(i)) *
weights[i];
}
switch (mode) {
case 0:
color = sum;
break;
default:
color = vec4(1.0);
}
#ifdef DEBUG
color = vec4(1.0, 0.0, 0.0, 1.0);
#endif
}
"""

INDENTED_SHADER = """\
#version 330 core
// Blur shader
layout(location = 0) out vec4 color;
uniform sampler2D tex;

/* Gaussian
 * weights
 */
const float weights[3] = float[](
    0.25,
    0.5,
    0.25
);

void main()
{
    vec4 sum = vec4(0.0);
    for (int i = 0; i < 3; i++) {
        sum += texture(tex, vec2(i)) *
            weights[i];
    }
    switch (mode) {
    case 0:
        color = sum;
        break;
    default:
        color = vec4(1.0);
    }
#ifdef DEBUG
    color = vec4(1.0, 0.0, 0.0, 1.0);
#endif
}
"""


@pytest.fixture
def raw_shader() -> str:
    """Fixture: blur shader with every line at column 0."""
    return RAW_SHADER


@pytest.fixture
def indented_shader() -> str:
    """Fixture: the blur shader as glslfmt lays it out."""
    return INDENTED_SHADER
