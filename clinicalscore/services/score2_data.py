"""SCORE2 10-year cardiovascular risk chart (low-risk region), in percent.

Indexed as SCORE2_TABLE[sex][smoking][ldl_band][age_band][bp_band].
"""

SCORE2_TABLE: dict[str, dict[str, dict[str, dict[str, dict[str, int]]]]] = {
    "female": {
        "non_smoker": {
            "2.2-3.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 1},
                "45-49": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 1},
                "50-54": {"100-119": 1, "120-139": 1, "140-159": 2, "160-179": 2},
                "55-59": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 3},
                "60-64": {"100-119": 2, "120-139": 3, "140-159": 4, "160-179": 4},
                "65-69": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "70-74": {"100-119": 5, "120-139": 6, "140-159": 7, "160-179": 9},
                "75-79": {"100-119": 7, "120-139": 8, "140-159": 10, "160-179": 13},
                "80-84": {"100-119": 9, "120-139": 12, "140-159": 14, "160-179": 17},
                "85-89": {"100-119": 13, "120-139": 16, "140-159": 20, "160-179": 24},
            },
            "3.2-4.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 1},
                "45-49": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 1},
                "50-54": {"100-119": 1, "120-139": 2, "140-159": 2, "160-179": 2},
                "55-59": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 3},
                "60-64": {"100-119": 3, "120-139": 3, "140-159": 4, "160-179": 5},
                "65-69": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 7},
                "70-74": {"100-119": 5, "120-139": 7, "140-159": 8, "160-179": 10},
                "75-79": {"100-119": 7, "120-139": 9, "140-159": 11, "160-179": 14},
                "80-84": {"100-119": 10, "120-139": 13, "140-159": 16, "160-179": 20},
                "85-89": {"100-119": 14, "120-139": 18, "140-159": 22, "160-179": 27},
            },
            "4.2-5.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 1},
                "45-49": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 2},
                "50-54": {"100-119": 1, "120-139": 2, "140-159": 2, "160-179": 3},
                "55-59": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "60-64": {"100-119": 3, "120-139": 4, "140-159": 4, "160-179": 5},
                "65-69": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 8},
                "70-74": {"100-119": 6, "120-139": 7, "140-159": 9, "160-179": 11},
                "75-79": {"100-119": 8, "120-139": 10, "140-159": 13, "160-179": 16},
                "80-84": {"100-119": 12, "120-139": 14, "140-159": 18, "160-179": 22},
                "85-89": {"100-119": 16, "120-139": 20, "140-159": 25, "160-179": 30},
            },
            "5.2-6.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 1},
                "45-49": {"100-119": 1, "120-139": 1, "140-159": 2, "160-179": 2},
                "50-54": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 3},
                "55-59": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "60-64": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "65-69": {"100-119": 5, "120-139": 6, "140-159": 7, "160-179": 9},
                "70-74": {"100-119": 7, "120-139": 8, "140-159": 10, "160-179": 13},
                "75-79": {"100-119": 9, "120-139": 12, "140-159": 14, "160-179": 18},
                "80-84": {"100-119": 13, "120-139": 16, "140-159": 20, "160-179": 24},
                "85-89": {"100-119": 18, "120-139": 22, "140-159": 28, "160-179": 34},
            },
        },
        "smoker": {
            "2.2-3.1": {
                "40-44": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 2},
                "45-49": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 3},
                "50-54": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "55-59": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "60-64": {"100-119": 4, "120-139": 5, "140-159": 7, "160-179": 8},
                "65-69": {"100-119": 6, "120-139": 7, "140-159": 9, "160-179": 11},
                "70-74": {"100-119": 8, "120-139": 10, "140-159": 13, "160-179": 15},
                "75-79": {"100-119": 11, "120-139": 14, "140-159": 17, "160-179": 21},
                "80-84": {"100-119": 14, "120-139": 18, "140-159": 22, "160-179": 27},
                "85-89": {"100-119": 19, "120-139": 23, "140-159": 29, "160-179": 36},
            },
            "3.2-4.1": {
                "40-44": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 2},
                "45-49": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 3},
                "50-54": {"100-119": 3, "120-139": 3, "140-159": 4, "160-179": 5},
                "55-59": {"100-119": 4, "120-139": 4, "140-159": 5, "160-179": 7},
                "60-64": {"100-119": 5, "120-139": 6, "140-159": 8, "160-179": 9},
                "65-69": {"100-119": 7, "120-139": 8, "140-159": 10, "160-179": 13},
                "70-74": {"100-119": 9, "120-139": 11, "140-159": 14, "160-179": 17},
                "75-79": {"100-119": 12, "120-139": 15, "140-159": 19, "160-179": 23},
                "80-84": {"100-119": 16, "120-139": 20, "140-159": 25, "160-179": 31},
                "85-89": {"100-119": 21, "120-139": 26, "140-159": 33, "160-179": 40},
            },
            "4.2-5.1": {
                "40-44": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 3},
                "45-49": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 4},
                "50-54": {"100-119": 3, "120-139": 4, "140-159": 4, "160-179": 5},
                "55-59": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 7},
                "60-64": {"100-119": 5, "120-139": 7, "140-159": 8, "160-179": 10},
                "65-69": {"100-119": 7, "120-139": 9, "140-159": 12, "160-179": 14},
                "70-74": {"100-119": 10, "120-139": 13, "140-159": 16, "160-179": 19},
                "75-79": {"100-119": 14, "120-139": 17, "140-159": 21, "160-179": 26},
                "80-84": {"100-119": 18, "120-139": 22, "140-159": 28, "160-179": 34},
                "85-89": {"100-119": 23, "120-139": 29, "140-159": 36, "160-179": 45},
            },
            "5.2-6.1": {
                "40-44": {"100-119": 2, "120-139": 2, "140-159": 2, "160-179": 3},
                "45-49": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "50-54": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "55-59": {"100-119": 4, "120-139": 5, "140-159": 7, "160-179": 8},
                "60-64": {"100-119": 6, "120-139": 8, "140-159": 9, "160-179": 12},
                "65-69": {"100-119": 8, "120-139": 10, "140-159": 13, "160-179": 16},
                "70-74": {"100-119": 11, "120-139": 14, "140-159": 18, "160-179": 22},
                "75-79": {"100-119": 15, "120-139": 19, "140-159": 23, "160-179": 29},
                "80-84": {"100-119": 20, "120-139": 25, "140-159": 31, "160-179": 38},
                "85-89": {"100-119": 26, "120-139": 33, "140-159": 41, "160-179": 50},
            },
        },
    },
    "male": {
        "non_smoker": {
            "2.2-3.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 1, "160-179": 2},
                "45-49": {"100-119": 1, "120-139": 2, "140-159": 2, "160-179": 2},
                "50-54": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 3},
                "55-59": {"100-119": 3, "120-139": 3, "140-159": 4, "160-179": 5},
                "60-64": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "65-69": {"100-119": 5, "120-139": 6, "140-159": 7, "160-179": 9},
                "70-74": {"100-119": 6, "120-139": 8, "140-159": 10, "160-179": 12},
                "75-79": {"100-119": 8, "120-139": 10, "140-159": 13, "160-179": 16},
                "80-84": {"100-119": 11, "120-139": 14, "140-159": 17, "160-179": 21},
                "85-89": {"100-119": 15, "120-139": 18, "140-159": 22, "160-179": 28},
            },
            "3.2-4.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 2, "160-179": 2},
                "45-49": {"100-119": 1, "120-139": 2, "140-159": 2, "160-179": 3},
                "50-54": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "55-59": {"100-119": 3, "120-139": 4, "140-159": 4, "160-179": 5},
                "60-64": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 7},
                "65-69": {"100-119": 5, "120-139": 6, "140-159": 8, "160-179": 10},
                "70-74": {"100-119": 7, "120-139": 9, "140-159": 11, "160-179": 13},
                "75-79": {"100-119": 9, "120-139": 12, "140-159": 14, "160-179": 18},
                "80-84": {"100-119": 12, "120-139": 15, "140-159": 19, "160-179": 23},
                "85-89": {"100-119": 16, "120-139": 20, "140-159": 25, "160-179": 31},
            },
            "4.2-5.1": {
                "40-44": {"100-119": 1, "120-139": 1, "140-159": 2, "160-179": 2},
                "45-49": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 3},
                "50-54": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "55-59": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "60-64": {"100-119": 4, "120-139": 5, "140-159": 7, "160-179": 8},
                "65-69": {"100-119": 6, "120-139": 7, "140-159": 9, "160-179": 11},
                "70-74": {"100-119": 8, "120-139": 10, "140-159": 12, "160-179": 15},
                "75-79": {"100-119": 10, "120-139": 13, "140-159": 16, "160-179": 20},
                "80-84": {"100-119": 14, "120-139": 17, "140-159": 21, "160-179": 26},
                "85-89": {"100-119": 18, "120-139": 23, "140-159": 28, "160-179": 34},
            },
            "5.2-6.1": {
                "40-44": {"100-119": 1, "120-139": 2, "140-159": 2, "160-179": 2},
                "45-49": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 3},
                "50-54": {"100-119": 3, "120-139": 3, "140-159": 4, "160-179": 5},
                "55-59": {"100-119": 4, "120-139": 4, "140-159": 5, "160-179": 7},
                "60-64": {"100-119": 5, "120-139": 6, "140-159": 7, "160-179": 9},
                "65-69": {"100-119": 6, "120-139": 8, "140-159": 10, "160-179": 12},
                "70-74": {"100-119": 9, "120-139": 11, "140-159": 13, "160-179": 16},
                "75-79": {"100-119": 12, "120-139": 15, "140-159": 18, "160-179": 22},
                "80-84": {"100-119": 15, "120-139": 19, "140-159": 24, "160-179": 29},
                "85-89": {"100-119": 20, "120-139": 25, "140-159": 31, "160-179": 39},
            },
        },
        "smoker": {
            "2.2-3.1": {
                "40-44": {"100-119": 2, "120-139": 2, "140-159": 3, "160-179": 4},
                "45-49": {"100-119": 3, "120-139": 3, "140-159": 4, "160-179": 5},
                "50-54": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 7},
                "55-59": {"100-119": 5, "120-139": 6, "140-159": 8, "160-179": 9},
                "60-64": {"100-119": 6, "120-139": 8, "140-159": 10, "160-179": 12},
                "65-69": {"100-119": 8, "120-139": 10, "140-159": 13, "160-179": 16},
                "70-74": {"100-119": 11, "120-139": 13, "140-159": 17, "160-179": 20},
                "75-79": {"100-119": 14, "120-139": 17, "140-159": 21, "160-179": 26},
                "80-84": {"100-119": 17, "120-139": 21, "140-159": 27, "160-179": 33},
                "85-89": {"100-119": 21, "120-139": 27, "140-159": 33, "160-179": 41},
            },
            "3.2-4.1": {
                "40-44": {"100-119": 2, "120-139": 3, "140-159": 3, "160-179": 4},
                "45-49": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 6},
                "50-54": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 8},
                "55-59": {"100-119": 5, "120-139": 7, "140-159": 9, "160-179": 10},
                "60-64": {"100-119": 7, "120-139": 9, "140-159": 11, "160-179": 14},
                "65-69": {"100-119": 9, "120-139": 12, "140-159": 14, "160-179": 18},
                "70-74": {"100-119": 12, "120-139": 15, "140-159": 19, "160-179": 23},
                "75-79": {"100-119": 15, "120-139": 19, "140-159": 24, "160-179": 29},
                "80-84": {"100-119": 19, "120-139": 24, "140-159": 30, "160-179": 37},
                "85-89": {"100-119": 24, "120-139": 30, "140-159": 37, "160-179": 46},
            },
            "4.2-5.1": {
                "40-44": {"100-119": 2, "120-139": 3, "140-159": 4, "160-179": 5},
                "45-49": {"100-119": 3, "120-139": 4, "140-159": 5, "160-179": 7},
                "50-54": {"100-119": 5, "120-139": 6, "140-159": 7, "160-179": 9},
                "55-59": {"100-119": 6, "120-139": 8, "140-159": 9, "160-179": 12},
                "60-64": {"100-119": 8, "120-139": 10, "140-159": 12, "160-179": 15},
                "65-69": {"100-119": 10, "120-139": 13, "140-159": 16, "160-179": 20},
                "70-74": {"100-119": 13, "120-139": 17, "140-159": 21, "160-179": 25},
                "75-79": {"100-119": 17, "120-139": 21, "140-159": 26, "160-179": 32},
                "80-84": {"100-119": 21, "120-139": 27, "140-159": 33, "160-179": 41},
                "85-89": {"100-119": 27, "120-139": 34, "140-159": 42, "160-179": 51},
            },
            "5.2-6.1": {
                "40-44": {"100-119": 3, "120-139": 3, "140-159": 4, "160-179": 5},
                "45-49": {"100-119": 4, "120-139": 5, "140-159": 6, "160-179": 7},
                "50-54": {"100-119": 5, "120-139": 6, "140-159": 8, "160-179": 10},
                "55-59": {"100-119": 7, "120-139": 9, "140-159": 11, "160-179": 13},
                "60-64": {"100-119": 9, "120-139": 11, "140-159": 14, "160-179": 17},
                "65-69": {"100-119": 12, "120-139": 14, "140-159": 18, "160-179": 22},
                "70-74": {"100-119": 15, "120-139": 19, "140-159": 23, "160-179": 28},
                "75-79": {"100-119": 19, "120-139": 24, "140-159": 30, "160-179": 36},
                "80-84": {"100-119": 24, "120-139": 30, "140-159": 37, "160-179": 46},
                "85-89": {"100-119": 30, "120-139": 38, "140-159": 47, "160-179": 57},
            },
        },
    },
}
