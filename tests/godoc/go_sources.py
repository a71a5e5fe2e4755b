"""Go sources shared by the extraction tests."""

from __future__ import annotations

SHAPES_SOURCE = """
// Package shapes computes areas.
//
// It is a test package.
package shapes

import (
	"errors"

	"example.com/geo/internal/units"
)

// Pi is a constant.
const Pi = 3.14

// Kind enumerates shapes.
type Kind int

// Shape kinds.
const (
	Circle Kind = iota
	Square
)

// ErrNegative is returned for negative sizes.
var ErrNegative = errors.New("negative")

// Shape is anything with an area.
type Shape interface {
	Area() float64
}

// Rect is a rectangle.
type Rect struct {
	W, H float64
}

// NewRect returns a rectangle.
func NewRect(w, h float64) (*Rect, error) {
	if w < 0 || h < 0 {
		return nil, ErrNegative
	}
	return &Rect{W: w, H: h}, nil
}

// Area returns the area.
func (r *Rect) Area() float64 { return r.W * r.H * units.Scale }

func (r *Rect) scale(f float64) { r.W *= f }

// Sum adds areas.
func Sum(shapes ...Shape) float64 {
	total := 0.0
	for _, s := range shapes {
		total += s.Area()
	}
	return total
}

type point struct{ x, y float64 }

// newPoint builds a point.
func newPoint() point { return point{} }

//go:generate echo hi
// Origin returns the origin.
func Origin() float64 { return 0 }
"""

SHAPES_TEST_SOURCE = """
package shapes_test

import (
	"fmt"

	"example.com/geo/shapes"
)

func Example() {
	fmt.Println(shapes.Pi)
	// Output: 3.14
}

// Build a rectangle.
func ExampleNewRect() {
	r, _ := shapes.NewRect(2, 3)
	fmt.Println(r.Area())
	// Output:
	// 6
}

func ExampleRect_Area_square() {
	r, _ := shapes.NewRect(2, 2)
	fmt.Println(r.Area())
}

func ExampleSum() {
	fmt.Println(shapes.Sum())
}

func ExampleUnknown() {}

func helper() {}
"""
