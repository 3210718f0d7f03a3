"""The recipe domain. Centres around the `RecipeRepository`.

A recipe is an aggregate: its ingredients and directions have no identity of
their own and are always written together with it. Storage is a Mongo
collection handed to the repository; everything above it deals in `Recipe`
objects, hex string ids and the errors in `domain.errors`.
"""
