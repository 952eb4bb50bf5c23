import os

from verdict import expect, expect_equal, is_testing, skip, test_that, testing_package

with test_that("running under verdict"):
    expect(is_testing())
    expect_equal(testing_package(), "calculator")

with test_that("cache directory from setup"):
    expect(os.path.isdir(CACHE_DIR))

with test_that("slow path"):
    skip("only on CI")
