"""
GLSL Vocabulary Tables
======================

Fixed word lists for the OpenGL Shading Language, covering GLSL 1.10
through 4.60 (plus the OpenGL ES precision qualifiers). The classifier
looks identifiers up in these sets; nothing here is mutated at runtime.
User additions are supplied separately through VocabularyConfig.

Tables
------
| Table                   | Contents                                     |
|-------------------------|----------------------------------------------|
| TYPES                   | scalar, vector, matrix, sampler, image types |
| QUALIFIERS              | storage, interpolation, precision, memory    |
| KEYWORDS                | control flow and other language keywords     |
| RESERVED                | words reserved for future use                |
| BUILTINS                | builtin functions and gl_* variables         |
| DEPRECATED_BUILTINS     | pre-1.30 texture lookup functions, ftransform|
| DEPRECATED_QUALIFIERS   | attribute, varying                           |
| DEPRECATED_VARIABLES    | fixed-function gl_* state                    |
| PREPROCESSOR_DIRECTIVES | names following '#'                          |
| PREPROCESSOR_BUILTINS   | predefined macros                            |
| PREPROCESSOR_EXPRESSIONS| 'defined' and the '##' paste operator        |

The sets are pairwise disjoint, so the lookup order only matters for
user-supplied additions.
"""


def _words(text: str) -> frozenset[str]:
    return frozenset(text.split())


def _expand(stems: str, suffixes: str) -> frozenset[str]:
    return frozenset(stem + suffix for stem in stems.split() for suffix in suffixes.split())


# =============================================================================
# Types
# =============================================================================

_SAMPLER_SHAPES = """
    1D 2D 3D Cube 2DRect 1DArray 2DArray CubeArray Buffer 2DMS 2DMSArray
"""

TYPES: frozenset[str] = (
    _words("""
        void bool int uint float double atomic_uint struct
        mat2 mat3 mat4 dmat2 dmat3 dmat4
        mat2x2 mat2x3 mat2x4 mat3x2 mat3x3 mat3x4 mat4x2 mat4x3 mat4x4
        dmat2x2 dmat2x3 dmat2x4 dmat3x2 dmat3x3 dmat3x4 dmat4x2 dmat4x3 dmat4x4
        sampler1DShadow sampler2DShadow samplerCubeShadow sampler2DRectShadow
        sampler1DArrayShadow sampler2DArrayShadow samplerCubeArrayShadow
        sampler samplerShadow subpassInput isubpassInput usubpassInput
        subpassInputMS isubpassInputMS usubpassInputMS
    """)
    | _expand("vec ivec uvec bvec dvec", "2 3 4")
    | _expand("sampler isampler usampler", _SAMPLER_SHAPES)
    | _expand("image iimage uimage", _SAMPLER_SHAPES)
)


# =============================================================================
# Qualifiers
# =============================================================================

QUALIFIERS: frozenset[str] = _words("""
    const in out inout uniform buffer shared
    centroid sample patch flat smooth noperspective
    layout invariant precise
    coherent volatile restrict readonly writeonly
    lowp mediump highp
""")

DEPRECATED_QUALIFIERS: frozenset[str] = _words("attribute varying")


# =============================================================================
# Keywords and Reserved Words
# =============================================================================

KEYWORDS: frozenset[str] = _words("""
    break continue do for while if else switch case default
    discard return precision subroutine true false
""")

RESERVED: frozenset[str] = _words("""
    common partition active asm class union enum typedef template this
    resource goto inline noinline public static extern external interface
    long short half fixed unsigned superp input output
    hvec2 hvec3 hvec4 fvec2 fvec3 fvec4 sampler3DRect filter
    sizeof cast namespace using
""")


# =============================================================================
# Builtin Functions and Variables
# =============================================================================

BUILTIN_FUNCTIONS: frozenset[str] = _words("""
    radians degrees sin cos tan asin acos atan sinh cosh tanh asinh acosh atanh
    pow exp log exp2 log2 sqrt inversesqrt
    abs sign floor trunc round roundEven ceil fract mod modf min max clamp mix
    step smoothstep isnan isinf fma frexp ldexp
    floatBitsToInt floatBitsToUint intBitsToFloat uintBitsToFloat
    packUnorm2x16 packSnorm2x16 packUnorm4x8 packSnorm4x8
    unpackUnorm2x16 unpackSnorm2x16 unpackUnorm4x8 unpackSnorm4x8
    packHalf2x16 unpackHalf2x16 packDouble2x32 unpackDouble2x32
    length distance dot cross normalize faceforward reflect refract
    matrixCompMult outerProduct transpose determinant inverse
    lessThan lessThanEqual greaterThan greaterThanEqual equal notEqual any all not
    uaddCarry usubBorrow umulExtended imulExtended
    bitfieldExtract bitfieldInsert bitfieldReverse bitCount findLSB findMSB
    textureSize textureQueryLod textureQueryLevels textureSamples
    texture textureProj textureLod textureOffset texelFetch texelFetchOffset
    textureProjOffset textureLodOffset textureProjLod textureProjLodOffset
    textureGrad textureGradOffset textureProjGrad textureProjGradOffset
    textureGather textureGatherOffset textureGatherOffsets
    atomicCounterIncrement atomicCounterDecrement atomicCounter
    atomicCounterAdd atomicCounterSubtract atomicCounterMin atomicCounterMax
    atomicCounterAnd atomicCounterOr atomicCounterXor
    atomicCounterExchange atomicCounterCompSwap
    atomicAdd atomicMin atomicMax atomicAnd atomicOr atomicXor
    atomicExchange atomicCompSwap
    imageSize imageSamples imageLoad imageStore
    imageAtomicAdd imageAtomicMin imageAtomicMax imageAtomicAnd imageAtomicOr
    imageAtomicXor imageAtomicExchange imageAtomicCompSwap
    dFdx dFdy dFdxFine dFdyFine dFdxCoarse dFdyCoarse
    fwidth fwidthFine fwidthCoarse
    interpolateAtCentroid interpolateAtSample interpolateAtOffset
    EmitStreamVertex EndStreamPrimitive EmitVertex EndPrimitive
    barrier memoryBarrier memoryBarrierAtomicCounter memoryBarrierBuffer
    memoryBarrierShared memoryBarrierImage groupMemoryBarrier
    subpassLoad anyInvocation allInvocations allInvocationsEqual
""")

BUILTIN_VARIABLES: frozenset[str] = _words("""
    gl_VertexID gl_InstanceID gl_VertexIndex gl_InstanceIndex
    gl_DrawID gl_BaseVertex gl_BaseInstance
    gl_Position gl_PointSize gl_ClipDistance gl_CullDistance gl_PerVertex
    gl_in gl_out gl_PrimitiveIDIn gl_PrimitiveID gl_InvocationID
    gl_Layer gl_ViewportIndex gl_PatchVerticesIn
    gl_TessLevelOuter gl_TessLevelInner gl_TessCoord
    gl_FragCoord gl_FrontFacing gl_PointCoord gl_FragDepth
    gl_SampleID gl_SamplePosition gl_SampleMask gl_SampleMaskIn
    gl_HelperInvocation gl_NumSamples gl_DepthRange
    gl_NumWorkGroups gl_WorkGroupSize gl_WorkGroupID gl_LocalInvocationID
    gl_GlobalInvocationID gl_LocalInvocationIndex
    gl_MaxVertexAttribs gl_MaxVertexUniformVectors gl_MaxVertexUniformComponents
    gl_MaxVertexOutputComponents gl_MaxVertexTextureImageUnits
    gl_MaxFragmentInputComponents gl_MaxFragmentUniformVectors
    gl_MaxFragmentUniformComponents gl_MaxTextureImageUnits
    gl_MaxCombinedTextureImageUnits gl_MaxDrawBuffers gl_MaxClipDistances
    gl_MaxCullDistances gl_MaxViewports gl_MaxPatchVertices gl_MaxTessGenLevel
    gl_MaxGeometryInputComponents gl_MaxGeometryOutputComponents
    gl_MaxGeometryOutputVertices gl_MaxSamples
    gl_MaxComputeWorkGroupCount gl_MaxComputeWorkGroupSize
    gl_MaxComputeUniformComponents gl_MaxComputeAtomicCounters
    gl_MaxImageUnits gl_MaxAtomicCounterBindings
    gl_MinProgramTexelOffset gl_MaxProgramTexelOffset
""")

BUILTINS: frozenset[str] = BUILTIN_FUNCTIONS | BUILTIN_VARIABLES

DEPRECATED_BUILTINS: frozenset[str] = (
    _words("texture1D texture2D texture3D shadow1D shadow2D")
    | _expand("texture1D texture2D texture3D shadow1D shadow2D", "Proj Lod ProjLod")
    | _words("textureCube textureCubeLod ftransform noise1 noise2 noise3 noise4")
)

DEPRECATED_VARIABLES: frozenset[str] = (
    _words("""
        gl_FragColor gl_FragData gl_Vertex gl_Normal gl_Color gl_SecondaryColor
        gl_FogCoord gl_FrontColor gl_BackColor gl_FrontSecondaryColor
        gl_BackSecondaryColor gl_TexCoord gl_FogFragCoord gl_ClipVertex
        gl_ModelViewMatrix gl_ProjectionMatrix gl_ModelViewProjectionMatrix
        gl_TextureMatrix gl_NormalMatrix gl_NormalScale
        gl_ModelViewMatrixInverse gl_ProjectionMatrixInverse
        gl_ModelViewProjectionMatrixInverse gl_TextureMatrixInverse
        gl_ModelViewMatrixTranspose gl_ProjectionMatrixTranspose
        gl_ModelViewProjectionMatrixTranspose gl_TextureMatrixTranspose
        gl_ModelViewMatrixInverseTranspose gl_ProjectionMatrixInverseTranspose
        gl_ModelViewProjectionMatrixInverseTranspose gl_TextureMatrixInverseTranspose
        gl_ClipPlane gl_Point gl_FrontMaterial gl_BackMaterial gl_LightSource
        gl_LightModel gl_FrontLightModelProduct gl_BackLightModelProduct
        gl_FrontLightProduct gl_BackLightProduct gl_TextureEnvColor
        gl_EyePlaneS gl_EyePlaneT gl_EyePlaneR gl_EyePlaneQ
        gl_ObjectPlaneS gl_ObjectPlaneT gl_ObjectPlaneR gl_ObjectPlaneQ gl_Fog
        gl_MaxLights gl_MaxClipPlanes gl_MaxTextureUnits gl_MaxTextureCoords
        gl_MaxVaryingFloats gl_MaxVaryingComponents
    """)
    | _expand("gl_MultiTexCoord", "0 1 2 3 4 5 6 7")
)


# =============================================================================
# Preprocessor
# =============================================================================

PREPROCESSOR_DIRECTIVES: frozenset[str] = _words("""
    define undef if ifdef ifndef else elif endif
    error pragma extension version line include
""")

PREPROCESSOR_BUILTINS: frozenset[str] = _words("""
    __LINE__ __FILE__ __VERSION__
    GL_ES GL_core_profile GL_es_profile GL_compatibility_profile
""")

PREPROCESSOR_EXPRESSIONS: frozenset[str] = _words("defined ##")
