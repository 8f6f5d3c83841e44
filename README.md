# delaunay

A small, dependency-free library that reads SVG drawings and turns every
shape into cubic Bezier paths, plus two numeric helpers used when
generating meshes: a quadratic function and a seedable random source.

## Installation

```
pip install .
```

## Reading SVG

The elements `path`, `rect`, `circle`, `ellipse`, `line`, `polyline` and
`polygon` each become a `Shape` holding a list of `Path` objects. A path's
`points` is a list of `(x, y)` tuples: a start point followed by groups of
three points (two control points and an end point), so `1 + 3*n` points
for `n` segments. Straight lines are stored as cubic segments too.

```python
from delaunay.svg.parser import parse, parse_file

image = parse('<svg width="100" height="100">'
              '<rect x="10" y="10" width="50" height="20"/></svg>',
              "px", 96)

print(image.width, image.height)
for shape in image.shapes:
    for path in shape.paths:
        print(path.closed, path.bounds)
        for curve in path.curves():   # eight numbers: x0, y0, ..., x3, y3
            print(curve)
```

`parse(text, units="px", dpi=96.0)` reads a document held in a string and
`parse_file(filename, units="px", dpi=96.0)` reads one from disk. The
output units may be `px`, `pt`, `pc`, `mm`, `cm` or `in`; `dpi` controls
the conversion. Coordinates keep the SVG orientation, with y growing
downwards.

What is understood:

- nested `g` groups, `transform` lists (`matrix`, `translate`, `scale`,
  `rotate`, `skewX`, `skewY`), `viewBox` and `preserveAspectRatio`;
- presentation attributes and inline `style` declarations: fill and
  stroke paint, opacities, stroke width, dash array and offset, line cap,
  line join, miter limit, fill rule, `display="none"`;
- colours as `#rrggbb`, `#rgb`, `rgb(r, g, b)` (integers or percentages)
  and the names red, green, blue, yellow, cyan, magenta, black, grey,
  gray and white; any other name gives grey;
- linear and radial gradients with their stops, `gradientUnits`,
  `gradientTransform`, `spreadMethod` and `xlink:href` references.

Each `Shape` carries `id`, `fill` and `stroke` (`Paint` with a
`PaintType`, a `0xAABBGGRR` colour or a `Gradient`), `opacity`,
`stroke_width`, `stroke_dash_offset`, `stroke_dash_array`,
`stroke_line_join`, `stroke_line_cap`, `miter_limit`, `fill_rule`,
`visible`, `bounds` and `paths`. `Path.copy()` returns an independent
duplicate.

The parser can also be driven directly. Every tag must lie wholly within
one call to `feed`; `finish` may be called once.

```python
from delaunay.svg.parser import SvgParser

parser = SvgParser(96)
parser.feed(svg_text)
image = parser.finish("px")
```

Lower-level pieces can be used on their own:

- `delaunay.svg.transform`: the immutable affine `Transform`,
  `parse_transform`, `eval_bezier` and `curve_bounds` (tight bounds of a
  cubic segment);
- `delaunay.svg.colors`: `parse_color` and the hex, `rgb()` and name
  parsers;
- `delaunay.svg.values`: number, unit, opacity and enumeration parsers;
- `delaunay.svg.pathdata`: `parse_path_data` for a `d` attribute, and
  `PathBuilder`;
- `delaunay.svg.styles`: `StyleContext`, the inherited attribute stack;
- `delaunay.svg.xml`: `iter_xml`, a tolerant tag scanner yielding
  `XmlEvent` values.

## Helpers

```python
from delaunay.functions import QuadraticFunction
from delaunay.rng import Random, get_instance

f = QuadraticFunction()            # x**2 by default
f.set_coefficients(1.0, 0.0, -1.0)
f(2.0)                             # 3.0

rng = Random(42)
rng.uniform(10)                    # an integer in [0, 10); uniform(0) is 0
items = [1, 2, 3, 4]
rng.shuffle(items)                 # in place, as a single cycle

get_instance().uniform(100)        # shared generator, seeded from the clock
```

`Function` is the abstract base for callables of one float.

## What this package does not do

It does not triangulate or mesh anything, and it does not draw: it reads
SVG into paths and provides the helpers above. Text, images, `use`
references and CSS style sheets in a document are ignored, and there is
no command-line program.

## Tests

```
pip install .[test]
pytest
```