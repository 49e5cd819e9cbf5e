# Copyright 2019-present Kensho Technologies, LLC.
"""Query cost analysis.

Purpose
=======

Some GraphQL queries are too expensive to execute: a handful of nested list fields, each asking for
many items, can make a small query produce an enormous amount of work. If such queries are
executed, they can overload the server and all systems it depends on.

In order to prevent this, we statically estimate the *cost* of a query before executing it, and
reject queries whose cost exceeds a configured budget (the *maximum cost*).

Estimating Cost
===============

Every selected field has a *cost rule*, made up of a *complexity* (the cost of one instance of the
field) and an optional *multiplier* (the name of a field argument, e.g. "limit", whose value says
how many instances the field produces). The cost of a field occurrence is its complexity, times
its own multiplier value, times the multiplier values of all enclosing fields.

Example:
    Given the query
    {
        first(limit: 10) {
            second(limit: 10) {
                third(limit: 10)
            }
        }
    }
    where first, second and third have complexities 2, 5 and 6 and all use "limit" as their
    multiplier, the cost is 10*2 + 10*10*5 + 10*10*10*6 = 6520: each of the 10 "first" results
    produces 10 "second" results, each of which produces 10 "third" results.

Cost rules are looked up, in order of decreasing precedence, in:
    (1) the cost map, a configuration dict of type name -> field name -> cost rule;
    (2) the @cost directive on the field definition in the schema;
    (3) the @cost directive on the definition of the type the field returns;
and otherwise default to the configured default cost with no multiplier.

Complexities authored in the schema must be between 1 and 10. Negative multiplier values are
treated as 0, so that arguments cannot be used to lower the cost of a query.
"""
