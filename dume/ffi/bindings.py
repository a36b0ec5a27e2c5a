"""C declarations of the rendering engine, in cffi ABI mode.

Declarations are ABI-compatible with ``dume_renderer.h``; fixed-size color
arrays are declared as plain byte pointers.
"""

from __future__ import annotations

from cffi import FFI

CDEF = """
typedef struct DumeCtx DumeCtx;
typedef struct Paragraph Paragraph;
typedef struct Text Text;

typedef struct { float x; float y; } Vec2;

typedef struct {
    Vec2 max_dimensions;
    bool line_breaks;
    int baseline;
    int align_h;
    int align_v;
} TextLayout;

typedef struct {
    const char *family_name;
    size_t family_name_len;
    int weight;
    int style;
    float size;
    const uint8_t *color;
} CTextStyle;

typedef struct {
    const uint8_t *value;
    size_t len;
} Variable;

typedef struct {
    unsigned long window;
    void *display;
} RawWindow;

DumeCtx *dume_init(uint32_t width, uint32_t height, RawWindow window);
void dume_free(DumeCtx *ctx);
void dume_resize(DumeCtx *ctx, uint32_t new_width, uint32_t new_height);
uint32_t dume_get_width(DumeCtx *ctx);
uint32_t dume_get_height(DumeCtx *ctx);
void dume_render(DumeCtx *ctx);

void dume_load_font(DumeCtx *ctx, const uint8_t *font_data, size_t font_len);

uint64_t dume_create_sprite_from_encoded(DumeCtx *ctx, const uint8_t *name, size_t name_len,
                                         const uint8_t *data, size_t data_len);
uint64_t dume_create_sprite_from_rgba(DumeCtx *ctx, const uint8_t *name, size_t name_len,
                                      uint8_t *data, size_t data_len,
                                      uint32_t width, uint32_t height);
uint64_t dume_get_sprite_by_name(DumeCtx *ctx, const uint8_t *name, size_t name_len);
Vec2 dume_get_sprite_size(DumeCtx *ctx, uint64_t sprite);
void dume_draw_sprite(DumeCtx *ctx, Vec2 pos, float width, uint64_t sprite);

Text *dume_parse_markup(const uint8_t *markup, size_t markup_len, CTextStyle default_style,
                        void *userdata,
                        Variable (*resolve_variable)(void *, const uint8_t *, size_t));
void dume_text_free(Text *text);
Paragraph *dume_create_paragraph(DumeCtx *ctx, Text *text, TextLayout layout);
void dume_paragraph_free(Paragraph *paragraph);
void dume_paragraph_resize(DumeCtx *ctx, Paragraph *paragraph, Vec2 new_max_dimensions);
float dume_paragraph_width(const Paragraph *p);
float dume_paragraph_height(const Paragraph *p);
void dume_draw_paragraph(DumeCtx *ctx, Vec2 pos, const Paragraph *paragraph);

void dume_begin_path(DumeCtx *ctx);
void dume_move_to(DumeCtx *ctx, Vec2 pos);
void dume_line_to(DumeCtx *ctx, Vec2 pos);
void dume_quad_to(DumeCtx *ctx, Vec2 control, Vec2 pos);
void dume_cubic_to(DumeCtx *ctx, Vec2 control1, Vec2 control2, Vec2 pos);
void dume_arc(DumeCtx *ctx, Vec2 center, float radius, float start_angle, float end_angle);
void dume_stroke_width(DumeCtx *ctx, float width);
void dume_solid_color(DumeCtx *ctx, const uint8_t *color);
void dume_linear_gradient(DumeCtx *ctx, Vec2 point_a, Vec2 point_b,
                          const uint8_t *color_a, const uint8_t *color_b);
void dume_stroke(DumeCtx *ctx);
void dume_fill(DumeCtx *ctx);

void dume_translate(DumeCtx *ctx, Vec2 vector);
void dume_scale(DumeCtx *ctx, float scale);
void dume_reset_transform(DumeCtx *ctx);
void dume_scissor_rect(DumeCtx *ctx, Vec2 pos, Vec2 size);
void dume_clear_scissor(DumeCtx *ctx);
"""

RESOLVE_VARIABLE_SIGNATURE = "Variable(void *, const uint8_t *, size_t)"

ffi = FFI()
ffi.cdef(CDEF)


__all__ = ["CDEF", "RESOLVE_VARIABLE_SIGNATURE", "ffi"]
